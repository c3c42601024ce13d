"""
Classifieds — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from tests.factories import StaffUserFactory, build_sample_hierarchy
from tests.fakes import FakeLocationService, sample_payloads, with_bare_district


@pytest.fixture(autouse=True)
def clear_cache():
    """The hierarchy payload cache must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Staff user allowed to edit locations."""
    return StaffUserFactory()


@pytest.fixture
def staff_client(api_client, staff_user):
    """API client authenticated as staff."""
    api_client.force_authenticate(user=staff_user)
    return api_client


@pytest.fixture
def hierarchy(db):
    """Bagmati → Kathmandu → KMC → wards 3 / 26 → areas, plus a second municipality reusing ward 3."""
    return build_sample_hierarchy()


@pytest.fixture
def fake_service():
    """In-memory location service returning the sample payloads."""
    return FakeLocationService(sample_payloads())


@pytest.fixture
def sparse_service():
    """Like fake_service, plus a Bagmati district with nothing below it."""
    return FakeLocationService(with_bare_district(sample_payloads()))
