"""Tests for bootstrap request validation."""

from __future__ import annotations

import pytest

from taskdesk.bootstrap.validators import (
    INVALID_BODY,
    INVALID_EMAIL,
    INVALID_FULL_NAME,
    INVALID_PASSWORD,
    is_valid_email,
    is_valid_full_name,
    is_valid_password,
    validate_admin_request,
)
from taskdesk.core.exceptions import InvalidRequestError


class TestIsValidEmail:
    @pytest.mark.parametrize("email", ["a@b.co", "admin@example.com", "first.last@sub.example.vn"])
    def test_accepts_simple_addresses(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize("email", ["not-an-email", "", "a@b", "a b@c.de", "@b.co", "a@@b.co", None, 42])
    def test_rejects_malformed(self, email):
        assert is_valid_email(email) is False

    def test_rejects_over_255_characters(self):
        assert is_valid_email("a" * 256 + "@b.co") is False

    def test_accepts_exactly_255_characters(self):
        email = "a" * 250 + "@b.co"
        assert len(email) == 255
        assert is_valid_email(email) is True


class TestIsValidPassword:
    @pytest.mark.parametrize("length", [6, 128])
    def test_accepts_bounds(self, length):
        assert is_valid_password("x" * length) is True

    @pytest.mark.parametrize("length", [0, 5, 129])
    def test_rejects_out_of_range(self, length):
        assert is_valid_password("x" * length) is False

    def test_rejects_non_string(self):
        assert is_valid_password(123456) is False


class TestIsValidFullName:
    def test_bounds(self):
        assert is_valid_full_name("A") is True
        assert is_valid_full_name("A" * 100) is True
        assert is_valid_full_name("A" * 101) is False
        assert is_valid_full_name("") is False


class TestValidateAdminRequest:
    def test_returns_normalized_candidate(self):
        candidate = validate_admin_request(
            {"email": "Admin@Example.COM", "password": "secret1", "fullName": "  Jo Admin "}
        )
        assert candidate.email == "admin@example.com"
        assert candidate.full_name == "Jo Admin"
        assert candidate.display_name == "Jo Admin"

    def test_full_name_is_optional(self):
        candidate = validate_admin_request({"email": "a@b.co", "password": "secret1"})
        assert candidate.full_name is None
        assert candidate.display_name == "Admin"

    def test_non_object_body(self):
        with pytest.raises(InvalidRequestError, match=INVALID_BODY):
            validate_admin_request(["a@b.co"])

    def test_email_checked_first(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_admin_request({"email": "bad", "password": "x", "fullName": "A" * 200})
        assert str(exc_info.value) == INVALID_EMAIL

    def test_password_checked_before_full_name(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_admin_request({"email": "a@b.co", "password": "x", "fullName": "A" * 200})
        assert str(exc_info.value) == INVALID_PASSWORD

    def test_full_name_too_long(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_admin_request({"email": "a@b.co", "password": "secret1", "fullName": "A" * 101})
        assert str(exc_info.value) == INVALID_FULL_NAME

    def test_password_is_hidden_from_repr(self):
        candidate = validate_admin_request({"email": "a@b.co", "password": "secret1"})
        assert "secret1" not in repr(candidate)
