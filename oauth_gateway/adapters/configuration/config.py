# oauth_gateway/adapters/configuration/config.py

from typing import List, Optional
from logging import getLevelName
from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "oauth_gateway"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    TEST_MODE: bool = False
    TEST_POSTGRES_DB: str = ""
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    DEBUG: bool = False

    # Access tokens
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600

    # Client quota
    DEFAULT_REQUEST_LIMIT: int = 5000
    RATE_LIMIT_WINDOW_SECONDS: int = 3600
    RATE_LIMIT_MAX_RETRIES: int = 3

    # Token validation: None means "not configured", callers pick their own default
    HTTP_HEADERS_ONLY: Optional[bool] = None

    # Scopes created at startup when missing (comma separated)
    DEFAULT_SCOPES: str = "basic"

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        db_name = data.get("TEST_POSTGRES_DB") if data.get("TEST_MODE") else data.get("POSTGRES_DB")
        password = data.get("POSTGRES_PASSWORD")
        credentials = f"{data.get('POSTGRES_USER')}:{password}" if password else data.get("POSTGRES_USER")
        return (
            f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}://{credentials}"
            f"@{data.get('POSTGRES_HOST')}:{data.get('POSTGRES_PORT')}/{db_name}"
        )

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Makes sure the value is a valid logging level"""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @property
    def default_scopes(self) -> List[str]:
        return [scope.strip() for scope in self.DEFAULT_SCOPES.split(",") if scope.strip()]

    @property
    def headers_only(self) -> bool:
        """Token source restriction, defaulting to False when HTTP_HEADERS_ONLY is unset."""
        return bool(self.HTTP_HEADERS_ONLY) if self.HTTP_HEADERS_ONLY is not None else False

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
