"""AdminProvisioner: idempotent create-or-repair of the first admin account."""

from __future__ import annotations

import logging

from taskdesk.core.exceptions import (
    AccountServiceError,
    AdminExistsError,
    DataStoreError,
    ProvisioningInconsistencyError,
)
from taskdesk.core.protocols import IAccountService, IDataStore
from taskdesk.core.types import ADMIN_ROLE, PROFILES_TABLE, USER_ROLES_TABLE
from taskdesk.models.admin import AccountRecord, AdminCandidate, ProvisionedAdmin, ProvisionResult

logger = logging.getLogger(__name__)

# Structured codes meaning "this email already has an account".
ALREADY_REGISTERED_CODES = frozenset({"email_exists", "user_already_exists", "UsernameExistsException"})
# Fallback when the provider only reports a message.
ALREADY_REGISTERED_PHRASES = ("already been registered", "already exists")


def is_already_registered(error: AccountServiceError) -> bool:
    """Decide whether an account-service failure means the email is taken.

    The only place that knows the provider's wording.
    """
    if error.code in ALREADY_REGISTERED_CODES:
        return True
    message = str(error).lower()
    return any(phrase in message for phrase in ALREADY_REGISTERED_PHRASES)


def role_row_id(user_id: str, role: str) -> str:
    return f"{user_id}#{role}"


class AdminProvisioner:
    """Creates the first admin, or repairs a pre-existing account into one.

    The account and its credentials are the source of truth. Profile and role
    rows are attached best-effort: failures become warnings on the result.
    """

    def __init__(self, accounts: IAccountService, store: IDataStore) -> None:
        self._accounts = accounts
        self._store = store

    def ensure_no_admin(self) -> None:
        """Raise AdminExistsError if any user already holds the admin role."""
        existing = self._store.select(USER_ROLES_TABLE, {"role": ADMIN_ROLE}, limit=1)
        if existing:
            raise AdminExistsError()

    def provision(self, candidate: AdminCandidate, *, checked: bool = False) -> ProvisionResult:
        """Create or repair the admin account for ``candidate``.

        Pass ``checked=True`` when the caller has just run ``ensure_no_admin``.
        """
        if not checked:
            self.ensure_no_admin()

        warnings: list[str] = []
        created = True
        try:
            account = self._accounts.create_user(
                candidate.email, candidate.password, candidate.display_name,
            )
            logger.info("User created: %s", account.id)
        except AccountServiceError as exc:
            if not is_already_registered(exc):
                raise
            logger.info("User %s exists, finding and updating", candidate.email)
            account = self._repair_existing(candidate, warnings)
            created = False

        warnings.extend(self._attach_profile(account.id, candidate.display_name))
        warnings.extend(self._attach_admin_role(account.id))

        return ProvisionResult(
            admin=ProvisionedAdmin(user_id=account.id, email=candidate.email),
            created=created,
            warnings=warnings,
        )

    def _repair_existing(self, candidate: AdminCandidate, warnings: list[str]) -> AccountRecord:
        account = next(
            (
                u for u in self._accounts.list_users()
                if u.email and u.email.lower() == candidate.email
            ),
            None,
        )
        if account is None:
            logger.error("Account service reports %s registered but it is not listed", candidate.email)
            raise ProvisioningInconsistencyError(candidate.email)

        try:
            self._accounts.update_password(account, candidate.password)
            logger.info("Password updated for existing user %s", account.id)
        except AccountServiceError as exc:
            logger.error("Error updating password for %s: %s", account.id, exc)
            warnings.append(f"Password update failed: {exc}")
        return account

    def _attach_profile(self, user_id: str, full_name: str) -> list[str]:
        try:
            if self._store.select(PROFILES_TABLE, {"id": user_id}, limit=1):
                return []
            self._store.insert(PROFILES_TABLE, {"id": user_id, "full_name": full_name})
        except DataStoreError as exc:
            logger.error("Error creating profile for %s: %s", user_id, exc)
            return [f"Profile creation failed: {exc}"]
        logger.info("Profile created for user: %s", user_id)
        return []

    def _attach_admin_role(self, user_id: str) -> list[str]:
        try:
            self._store.upsert(USER_ROLES_TABLE, {
                "id": role_row_id(user_id, ADMIN_ROLE),
                "user_id": user_id,
                "role": ADMIN_ROLE,
            })
        except DataStoreError as exc:
            logger.error("Error assigning admin role to %s: %s", user_id, exc)
            return [f"Admin role assignment failed: {exc}"]
        logger.info("Admin role assigned to user: %s", user_id)
        return []
