"""Unit tests for CognitoAccountService using moto."""

from __future__ import annotations

from unittest.mock import patch

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from taskdesk.bootstrap.provisioner import AdminProvisioner, is_already_registered
from taskdesk.core.exceptions import AccountServiceError
from taskdesk.models.admin import AdminCandidate
from taskdesk.persistence.cognito_backend import CognitoAccountService
from taskdesk.persistence.memory_backend import MemoryDataStore

REGION = "us-east-1"
PASSWORD = "Sup3r-Secret!"


@pytest.fixture
def pool_id():
    with mock_aws():
        client = boto3.client("cognito-idp", region_name=REGION)
        yield client.create_user_pool(PoolName="taskdesk-test")["UserPool"]["Id"]


@pytest.fixture
def service(pool_id):
    return CognitoAccountService(user_pool_id=pool_id, region=REGION)


class TestCreateUser:
    def test_creates_confirmed_user(self, service, pool_id):
        record = service.create_user("admin@example.com", PASSWORD, "Jo Admin")

        user = boto3.client("cognito-idp", region_name=REGION).admin_get_user(
            UserPoolId=pool_id, Username=record.username,
        )
        attrs = {a["Name"]: a["Value"] for a in user["UserAttributes"]}
        assert user["UserStatus"] == "CONFIRMED"
        assert attrs["email"] == "admin@example.com"
        assert attrs["name"] == "Jo Admin"

    def test_duplicate_is_recognized_as_already_registered(self, service):
        service.create_user("admin@example.com", PASSWORD, "Admin")
        with pytest.raises(AccountServiceError) as exc_info:
            service.create_user("admin@example.com", PASSWORD, "Admin")
        assert exc_info.value.code == "UsernameExistsException"
        assert is_already_registered(exc_info.value)

    def test_unknown_pool_is_wrapped(self):
        with mock_aws():
            service = CognitoAccountService(user_pool_id=f"{REGION}_missing", region=REGION)
            with pytest.raises(AccountServiceError):
                service.create_user("admin@example.com", PASSWORD, "Admin")

    def test_rejected_password_removes_created_user(self, service):
        rejected = ClientError(
            {"Error": {"Code": "InvalidPasswordException", "Message": "Password does not conform to policy"}},
            "AdminSetUserPassword",
        )
        with patch.object(service._client, "admin_set_user_password", side_effect=rejected):
            with pytest.raises(AccountServiceError) as exc_info:
                service.create_user("admin@example.com", "weak12", "Admin")

        assert exc_info.value.code == "InvalidPasswordException"
        assert service.list_users() == []


class TestListAndUpdate:
    def test_list_users_reports_created_account(self, service):
        created = service.create_user("admin@example.com", PASSWORD, "Admin")
        [listed] = service.list_users()
        assert listed.id == created.id
        assert listed.email == "admin@example.com"

    def test_update_password(self, service):
        created = service.create_user("admin@example.com", PASSWORD, "Admin")
        service.update_password(created, "An0ther-Secret!")  # should not raise


def test_provisioner_repairs_existing_cognito_user(service):
    existing = service.create_user("admin@example.com", PASSWORD, "Admin")
    store = MemoryDataStore()

    result = AdminProvisioner(service, store).provision(
        AdminCandidate(email="admin@example.com", password="N3w-Secret!")
    )

    assert result.admin.user_id == existing.id
    assert result.created is False
    assert store.select("user_roles", {"role": "admin"})[0]["user_id"] == existing.id
