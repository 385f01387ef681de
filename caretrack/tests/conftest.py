import pytest
from django.core.cache import cache

from caretrack.stores.registry import build_stores
from caretrack.tests.fakes import FakeBackend


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def backend(monkeypatch):
    """Fake backend; every ApiClient built during the test talks to it."""
    fake = FakeBackend()
    monkeypatch.setattr('caretrack.client.requests.Session', lambda: fake)
    return fake


@pytest.fixture
def stores(backend):
    s = build_stores('test-owner')
    s.auth.set_tokens('access-1', 'refresh-1')
    return s
