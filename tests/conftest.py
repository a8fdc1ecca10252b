"""Shared fixtures: memory backends seeded with lookup data."""

from __future__ import annotations

import pytest

from tests.fakes import MemoryAccountService, MemoryDataStore, MemoryRateLimitStore

PROJECTS = [
    {"id": "proj-1", "name": "Website Redesign"},
    {"id": "proj-2", "name": "Kho vận"},
]

EMPLOYEES = [
    {"id": "emp-1", "full_name": "Nguyễn Văn An"},
    {"id": "emp-2", "full_name": "Trần Thị Bình"},
]


@pytest.fixture
def data_store() -> MemoryDataStore:
    store = MemoryDataStore()
    store.seed("projects", PROJECTS)
    store.seed("employees", EMPLOYEES)
    return store


@pytest.fixture
def accounts() -> MemoryAccountService:
    return MemoryAccountService()


@pytest.fixture
def rate_limit_store() -> MemoryRateLimitStore:
    return MemoryRateLimitStore()
