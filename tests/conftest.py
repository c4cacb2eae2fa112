"""
Test configuration and fixtures for the waitlist API.

The app is wired to an in-memory sheet and cache so no Google or Redis
credentials are needed. Each test gets fresh collaborators through
app.dependency_overrides.
"""

import os
from typing import Generator
from unittest.mock import MagicMock

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("FORCE_IN_MEMORY_CACHE", "true")
os.environ.setdefault("PRODUCTION_MODE", "false")

import pytest
from fastapi.testclient import TestClient

from app.features.waitlist.dependencies.waitlist import get_waitlist_service
from app.features.waitlist.schemas.waitlist import WaitlistConfig
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.cache.redis import InMemoryCache
from app.platform.storage.sheets import InMemorySheetStorage


@pytest.fixture
def storage() -> InMemorySheetStorage:
    """Header-only sheet"""
    return InMemorySheetStorage()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def send_mail() -> MagicMock:
    return MagicMock()


@pytest.fixture
def config() -> WaitlistConfig:
    return WaitlistConfig(
        service_name="Dvand Waitlist",
        notification_email="team@dvand.in",
        sheet_url="https://docs.google.com/spreadsheets/d/test-sheet/edit",
    )


@pytest.fixture
def service(config, storage, cache, send_mail) -> WaitlistService:
    return WaitlistService(config=config, storage=storage, cache=cache, send_mail=send_mail)


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app, service) -> Generator[TestClient, None, None]:
    """
    Test client whose waitlist dependency is the per-test service fixture.
    """
    test_app.dependency_overrides[get_waitlist_service] = lambda: service
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.pop(get_waitlist_service, None)
