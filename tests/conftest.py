"""Shared test fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient

from guestlist.api.deps import get_checkin_locks, get_store
from guestlist.core.locks import KeyedLock
from guestlist.main import app
from tests.utils import GUESTS_GRID, FakeTableStore


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from guestlist.core.rate_limit import limiter

    limiter.reset()
    if "rate_limit" in request.keywords:
        yield
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True
    limiter.reset()


@pytest.fixture
def store():
    """Guest sheet with one unchecked, one checked and one 'FALSE' guest."""
    return FakeTableStore(GUESTS_GRID)


@pytest.fixture
def locks():
    return KeyedLock()


@pytest.fixture(scope="function")
def client(store, locks):
    """Create a test client backed by the in-memory store."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_checkin_locks] = lambda: locks
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
