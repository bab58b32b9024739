"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "QUOTEDESK_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "QUOTEDESK_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    decode_responses: bool = True
    key_prefix: str = "quotedesk:"  # namespace shared databases per environment


class S3Config(BaseSettings):
    """S3 file storage configuration for uploaded census files."""

    model_config = {"env_prefix": "QUOTEDESK_S3_"}

    bucket: str = "quotedesk-census-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class CensusConfig(BaseSettings):
    """Census intake and validation configuration."""

    model_config = {"env_prefix": "QUOTEDESK_CENSUS_"}

    batch_size: int = 500  # rows per store write
    validation_cache_ttl: int = 300  # seconds


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "QUOTEDESK_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    backend: Literal["memory", "aws"] = "memory"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
    census: CensusConfig = CensusConfig()
