"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class RateLimitConfig(BaseSettings):
    """Bootstrap endpoint admission control."""

    model_config = {"env_prefix": "TASKDESK_RATE_LIMIT_"}

    backend: Literal["memory", "redis"] = "memory"
    max_requests: int = 5
    window_seconds: int = 60


class BootstrapConfig(BaseSettings):
    """First-admin bootstrap endpoint configuration."""

    model_config = {"env_prefix": "TASKDESK_BOOTSTRAP_"}

    token: str | None = None  # shared secret checked against x-bootstrap-token


class RedisConfig(BaseSettings):
    """Redis configuration (shared rate-limit store)."""

    model_config = {"env_prefix": "TASKDESK_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class DynamoDBConfig(BaseSettings):
    """DynamoDB row store configuration."""

    model_config = {"env_prefix": "TASKDESK_DYNAMO_"}

    table_prefix: str = "taskdesk-"
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class CognitoConfig(BaseSettings):
    """Cognito user pool backing the account service."""

    model_config = {"env_prefix": "TASKDESK_COGNITO_"}

    user_pool_id: str = ""
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ImportConfig(BaseSettings):
    """Spreadsheet task import configuration."""

    model_config = {"env_prefix": "TASKDESK_IMPORT_"}

    allowed_extensions: list[str] = [".xlsx", ".xlsm", ".xls"]
    preview_rows: int = 10


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "TASKDESK_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    backend: Literal["memory", "aws"] = "memory"

    rate_limit: RateLimitConfig = RateLimitConfig()
    bootstrap: BootstrapConfig = BootstrapConfig()
    redis: RedisConfig = RedisConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    cognito: CognitoConfig = CognitoConfig()
    task_import: ImportConfig = ImportConfig()
