"""In-memory backends: dict-backed fakes for unit tests and local development."""

from __future__ import annotations

import copy
import uuid
from typing import Any

from taskdesk.core.exceptions import AccountServiceError, DataStoreError
from taskdesk.models.admin import AccountRecord
from taskdesk.models.rate_limit import RateLimitRecord


def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(row.get(k) == v for k, v in filters.items())


class MemoryDataStore:
    """Dict-backed IDataStore. Rows are keyed by their ``id`` column."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        self._write_failures: dict[str, str] = {}

    def seed(self, table: str, rows: list[dict[str, Any]]) -> None:
        """Load rows directly, replacing any with the same id."""
        for row in rows:
            self.upsert(table, row)

    def fail_writes(self, table: str, message: str) -> None:
        """Make every subsequent insert or upsert into ``table`` fail with ``message``."""
        self._write_failures[table] = message

    def rows(self, table: str) -> list[dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._tables.get(table, {}).values()]

    def select(
        self, table: str, filters: dict[str, Any] | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]:
        found = [copy.deepcopy(r) for r in self._tables.get(table, {}).values() if _matches(r, filters)]
        return found[:limit] if limit is not None else found

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        if table in self._write_failures:
            raise DataStoreError(self._write_failures[table])
        item = dict(row)
        item["id"] = item.get("id") or str(uuid.uuid4())
        rows = self._tables.setdefault(table, {})
        if item["id"] in rows:
            raise DataStoreError(f"duplicate key value violates unique constraint on {table}.id")
        rows[item["id"]] = item
        return copy.deepcopy(item)

    def upsert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        if table in self._write_failures:
            raise DataStoreError(self._write_failures[table])
        item = dict(row)
        item["id"] = item.get("id") or str(uuid.uuid4())
        self._tables.setdefault(table, {})[item["id"]] = item
        return copy.deepcopy(item)


class MemoryAccountService:
    """Dict-backed IAccountService for unit tests."""

    ALREADY_REGISTERED = "A user with this email address has already been registered"

    def __init__(self) -> None:
        self._accounts: dict[str, AccountRecord] = {}
        self.passwords: dict[str, str] = {}
        self.metadata: dict[str, dict[str, Any]] = {}
        self._create_failure: AccountServiceError | None = None
        self._update_failure: AccountServiceError | None = None

    def add_account(self, email: str, password: str = "", account_id: str | None = None) -> AccountRecord:
        """Register an account directly, as if created outside the bootstrap flow."""
        record = AccountRecord(id=account_id or str(uuid.uuid4()), email=email, username=email)
        self._accounts[record.id] = record
        self.passwords[record.id] = password
        return record

    def fail_create(self, message: str, code: str | None = None) -> None:
        self._create_failure = AccountServiceError(message, code=code)

    def fail_update(self, message: str, code: str | None = None) -> None:
        self._update_failure = AccountServiceError(message, code=code)

    def create_user(self, email: str, password: str, full_name: str) -> AccountRecord:
        if self._create_failure is not None:
            raise self._create_failure
        for account in self._accounts.values():
            if account.email and account.email.lower() == email.lower():
                raise AccountServiceError(self.ALREADY_REGISTERED, code="email_exists")
        record = self.add_account(email, password)
        self.metadata[record.id] = {"full_name": full_name, "email_confirmed": True}
        return record

    def list_users(self) -> list[AccountRecord]:
        return list(self._accounts.values())

    def update_password(self, account: AccountRecord, password: str) -> None:
        if self._update_failure is not None:
            raise self._update_failure
        if account.id not in self._accounts:
            raise AccountServiceError(f"User not found: {account.id}", code="user_not_found")
        self.passwords[account.id] = password


class MemoryRateLimitStore:
    """Process-local IRateLimitStore. Entries live until overwritten or restart."""

    def __init__(self) -> None:
        self._records: dict[str, RateLimitRecord] = {}

    def get(self, key: str) -> RateLimitRecord | None:
        return self._records.get(key)

    def put(self, record: RateLimitRecord, ttl: int) -> None:
        self._records[record.key] = record

    def __len__(self) -> int:
        return len(self._records)
