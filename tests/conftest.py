import itertools

import pytest

from django.core.cache import cache
from rest_framework.test import APIClient

_usernames = itertools.count(1)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    """Throttle counters live in the local-memory cache; reset them per test."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def make_user():
    """Factory for users belonging to the given role groups."""
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import Group

    def _make_user(username: str, *groups: str, is_superuser: bool = False):
        user = get_user_model().objects.create_user(
            username=username,
            password="testpass123",
            is_superuser=is_superuser,
        )
        for name in groups:
            group, _ = Group.objects.get_or_create(name=name)
            user.groups.add(group)
        return user

    return _make_user


@pytest.fixture()
def client_for(make_user):
    """APIClient force-authenticated as a user holding ``role`` (or none)."""

    def _client_for(role: str | None = None, *, is_superuser: bool = False):
        groups = (role,) if role else ()
        username = f"user-{role or 'norole'}-{next(_usernames)}"
        user = make_user(username, *groups, is_superuser=is_superuser)
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client_for
