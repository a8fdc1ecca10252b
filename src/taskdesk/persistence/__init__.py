"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from taskdesk.core.config import AppSettings
from taskdesk.core.protocols import IAccountService, IDataStore, IRateLimitStore
from taskdesk.persistence.cognito_backend import CognitoAccountService
from taskdesk.persistence.dynamodb_backend import DynamoDBDataStore
from taskdesk.persistence.memory_backend import (
    MemoryAccountService,
    MemoryDataStore,
    MemoryRateLimitStore,
)
from taskdesk.persistence.redis_backend import RedisRateLimitStore


def create_persistence(
    settings: AppSettings | None = None,
) -> tuple[IDataStore, IAccountService, IRateLimitStore]:
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (data_store, accounts, rate_limit_store).
    """
    if settings is None:
        settings = AppSettings()

    if settings.rate_limit.backend == "redis":
        rate_limit_store: IRateLimitStore = RedisRateLimitStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )
    else:
        rate_limit_store = MemoryRateLimitStore()

    if settings.backend == "memory":
        return MemoryDataStore(), MemoryAccountService(), rate_limit_store

    data_store = DynamoDBDataStore(
        table_prefix=settings.dynamodb.table_prefix,
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    accounts = CognitoAccountService(
        user_pool_id=settings.cognito.user_pool_id,
        region=settings.cognito.region,
        endpoint_url=settings.cognito.endpoint_url,
    )

    return data_store, accounts, rate_limit_store
