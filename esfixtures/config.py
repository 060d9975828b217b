"""
Configuration management using Pydantic Settings.
Loads from ESFIXTURES_-prefixed environment variables and .env file.
"""
from typing import Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with validation.

    Only variables carrying the ESFIXTURES_ prefix are read, so a host
    project's LOG_LEVEL or REQUEST_TIMEOUT never leaks in.
    """

    model_config = SettingsConfigDict(
        env_prefix="ESFIXTURES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Document store
    elasticsearch_url: str = Field(
        default="http://localhost:9200",
        description="Base URL of the Elasticsearch cluster"
    )
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    bulk_batch_size: int = Field(
        default=500,
        ge=1,
        description="Max records sent in a single _bulk request"
    )
    readiness_attempts: int = Field(
        default=10,
        ge=1,
        description="Ping attempts before the store is considered unavailable"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
