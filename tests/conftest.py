"""
Pytest configuration for the user pager demo.

Provides fixtures for:
- Settings with test-specific overrides
- A seeded, reproducible user collection and in-memory source
- An in-process gateway and query client
- A fresh pagination store per test
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

import pytest

from userpager.client.query_client import QueryClient
from userpager.client.transport import LocalTransport
from userpager.config import Settings
from userpager.datasource.memory import InMemoryUserSource, generate_users
from userpager.domain.models import UserRecord
from userpager.gateway.executor import QueryGateway
from userpager.state.store import PaginationStore

TEST_SEED = 42
FIXED_NOW = datetime(2025, 2, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides; no delay, fast prefetch cleanup.
    """
    return Settings(
        log_level="DEBUG",
        data_seed=TEST_SEED,
        delay_enabled=False,
        prefetch_clear_delay_ms=0,
        _env_file=None,
    )


@pytest.fixture(scope="session")
def users() -> Tuple[UserRecord, ...]:
    return generate_users(count=100, seed=TEST_SEED, now=FIXED_NOW)


@pytest.fixture
def source(users: Tuple[UserRecord, ...]) -> InMemoryUserSource:
    return InMemoryUserSource(users)


@pytest.fixture
def gateway(source: InMemoryUserSource) -> QueryGateway:
    return QueryGateway(source)


@pytest.fixture
def client(gateway: QueryGateway) -> QueryClient:
    return QueryClient(LocalTransport(gateway))


@pytest.fixture
def store() -> PaginationStore:
    return PaginationStore()
