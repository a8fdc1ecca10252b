"""Protocol interfaces for all TaskDesk abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from taskdesk.models.admin import AccountRecord
from taskdesk.models.rate_limit import RateLimitRecord


# ---------------------------------------------------------------------------
# Persistence: Row Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IDataStore(Protocol):
    """Row-oriented managed data store (projects, employees, tasks, profiles, user_roles)."""

    def select(
        self, table: str, filters: dict[str, Any] | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]: ...

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]: ...

    def upsert(self, table: str, row: dict[str, Any]) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Account Service
# ---------------------------------------------------------------------------

@runtime_checkable
class IAccountService(Protocol):
    """Managed authentication provider with admin privileges."""

    def create_user(self, email: str, password: str, full_name: str) -> AccountRecord: ...

    def list_users(self) -> list[AccountRecord]: ...

    def update_password(self, account: AccountRecord, password: str) -> None: ...


# ---------------------------------------------------------------------------
# Rate Limit Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IRateLimitStore(Protocol):
    """Key -> RateLimitRecord map backing the fixed-window limiter."""

    def get(self, key: str) -> RateLimitRecord | None: ...

    def put(self, record: RateLimitRecord, ttl: int) -> None: ...
