"""Pytest configuration and fixtures."""

import pytest

from waypoint.repository.registry import Repositories, build_repositories, open_engine
from waypoint.store.cache import LocalCache
from waypoint.store.remote import InMemoryRemoteStore
from waypoint.store.sync import SyncEngine


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def cache(cache_dir) -> LocalCache:
    return LocalCache(cache_dir)


@pytest.fixture
def remote() -> InMemoryRemoteStore:
    """Remote store with no session until a test signs in."""
    return InMemoryRemoteStore()


@pytest.fixture
def signed_in_remote(remote) -> InMemoryRemoteStore:
    remote.sign_in("user-1")
    return remote


@pytest.fixture
def engine(cache_dir, remote) -> SyncEngine:
    return open_engine(cache_dir, remote)


@pytest.fixture
def repos(engine) -> Repositories:
    return build_repositories(engine)
