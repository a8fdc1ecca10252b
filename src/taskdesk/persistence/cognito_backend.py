"""Cognito user pool backend implementing IAccountService."""

from __future__ import annotations

import logging
import secrets
from typing import Any

import boto3
from botocore.exceptions import ClientError

from taskdesk.core.exceptions import AccountServiceError
from taskdesk.models.admin import AccountRecord

logger = logging.getLogger(__name__)


def _wrap(exc: ClientError) -> AccountServiceError:
    """Translate a botocore error into AccountServiceError, keeping the code."""
    error = exc.response.get("Error", {})
    return AccountServiceError(error.get("Message") or str(exc), code=error.get("Code"))


def _temporary_password() -> str:
    """Throwaway password satisfying the default pool policy; replaced right after creation."""
    return f"Tt1!{secrets.token_urlsafe(24)}"


def _to_record(user: dict[str, Any]) -> AccountRecord:
    attrs = {a["Name"]: a["Value"] for a in user.get("Attributes", user.get("UserAttributes", []))}
    username = user["Username"]
    return AccountRecord(id=attrs.get("sub", username), email=attrs.get("email"), username=username)


class CognitoAccountService:
    """Production IAccountService backed by a Cognito user pool (admin APIs)."""

    def __init__(self, user_pool_id: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._user_pool_id = user_pool_id
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("cognito-idp", **kwargs)

    def create_user(self, email: str, password: str, full_name: str) -> AccountRecord:
        """Create a confirmed user with a permanent password and no invitation email.

        If the pool rejects the password, the half-created user is deleted so
        it is not left in FORCE_CHANGE_PASSWORD.
        """
        try:
            resp = self._client.admin_create_user(
                UserPoolId=self._user_pool_id,
                Username=email,
                TemporaryPassword=_temporary_password(),
                MessageAction="SUPPRESS",
                UserAttributes=[
                    {"Name": "email", "Value": email},
                    {"Name": "email_verified", "Value": "true"},
                    {"Name": "name", "Value": full_name},
                ],
            )
            record = _to_record(resp["User"])
        except ClientError as exc:
            raise _wrap(exc) from exc

        try:
            self._set_password(record.username, password)
        except ClientError as exc:
            self._discard(record.username)
            raise _wrap(exc) from exc
        return record

    def list_users(self) -> list[AccountRecord]:
        try:
            records: list[AccountRecord] = []
            paginator = self._client.get_paginator("list_users")
            for page in paginator.paginate(UserPoolId=self._user_pool_id):
                for user in page.get("Users", []):
                    records.append(_to_record(user))
            return records
        except ClientError as exc:
            raise _wrap(exc) from exc

    def update_password(self, account: AccountRecord, password: str) -> None:
        try:
            self._set_password(account.username, password)
        except ClientError as exc:
            raise _wrap(exc) from exc

    def _discard(self, username: str) -> None:
        try:
            self._client.admin_delete_user(UserPoolId=self._user_pool_id, Username=username)
        except ClientError as exc:
            logger.error("Could not remove half-created user %s: %s", username, exc)
        else:
            logger.info("Removed half-created user %s", username)

    def _set_password(self, username: str, password: str) -> None:
        self._client.admin_set_user_password(
            UserPoolId=self._user_pool_id,
            Username=username,
            Password=password,
            Permanent=True,
        )
