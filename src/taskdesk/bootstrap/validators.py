"""Structural validation of bootstrap requests."""

from __future__ import annotations

import re
from typing import Any

from taskdesk.core.exceptions import InvalidRequestError
from taskdesk.models.admin import AdminCandidate

# Deliberately permissive: local@domain.tld with no whitespace, not RFC 5322.
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
MAX_FULL_NAME_LENGTH = 100

INVALID_BODY = "Invalid JSON body"
INVALID_EMAIL = "Invalid email format or email too long (max 255 characters)"
INVALID_PASSWORD = "Password must be between 6 and 128 characters"
INVALID_FULL_NAME = "Full name must be between 1 and 100 characters"


def is_valid_email(email: Any) -> bool:
    return (
        isinstance(email, str)
        and 0 < len(email) <= MAX_EMAIL_LENGTH
        and EMAIL_RE.match(email) is not None
    )


def is_valid_password(password: Any) -> bool:
    return isinstance(password, str) and MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH


def is_valid_full_name(name: Any) -> bool:
    return isinstance(name, str) and 0 < len(name) <= MAX_FULL_NAME_LENGTH


def validate_admin_request(payload: Any) -> AdminCandidate:
    """Check email, then password, then full name; raise on the first failure.

    The full name is optional: absent or empty means "use the default".
    """
    if not isinstance(payload, dict):
        raise InvalidRequestError(INVALID_BODY)

    email = payload.get("email")
    if not is_valid_email(email):
        raise InvalidRequestError(INVALID_EMAIL)

    password = payload.get("password")
    if not is_valid_password(password):
        raise InvalidRequestError(INVALID_PASSWORD)

    full_name = payload.get("fullName")
    if full_name and not is_valid_full_name(full_name):
        raise InvalidRequestError(INVALID_FULL_NAME)

    if full_name:
        full_name = full_name.strip() or None
    return AdminCandidate(email=email.strip().lower(), password=password, full_name=full_name or None)
