"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational store connection settings.

    Environment variables:
        TALKROOM_DB_HOST: Database host (default: localhost)
        TALKROOM_DB_PORT: Database port (default: 5432)
        TALKROOM_DB_DATABASE: Database name (default: talkroom)
        TALKROOM_DB_USERNAME: Database user (default: talkroom)
        TALKROOM_DB_PASSWORD: Database password (required in production)
        TALKROOM_DB_POOL_MIN_CONNECTIONS: Connections kept open (default: 2)
        TALKROOM_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="TALKROOM_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="talkroom", description="Database name")
    username: str = Field(default="talkroom", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Connections kept open in the pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class FirestoreSettings(BaseSettings):
    """Document store settings.

    Environment variables:
        TALKROOM_FIRESTORE_PROJECT_ID: Google Cloud project id
        TALKROOM_FIRESTORE_DATABASE: Firestore database id (default: "(default)")
        TALKROOM_FIRESTORE_WRITE_TIMEOUT_SECONDS: Upper bound for each document
            write issued while a relational transaction is open (default: 5)

    Point the client at the emulator with FIRESTORE_EMULATOR_HOST.
    """

    model_config = SettingsConfigDict(
        env_prefix="TALKROOM_FIRESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_id: str = Field(default="talkroom-dev", description="GCP project id")
    database: str = Field(default="(default)", description="Firestore database id")
    write_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for each document write inside a transaction window",
        gt=0,
        le=60,
    )


class LineSettings(BaseSettings):
    """LINE Messaging API settings.

    Environment variables:
        TALKROOM_LINE_CHANNEL_ACCESS_TOKEN: Bearer token for the bot channel
        TALKROOM_LINE_API_BASE_URL: API root (default: https://api.line.me)
        TALKROOM_LINE_REQUEST_TIMEOUT_SECONDS: HTTP timeout (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="TALKROOM_LINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    channel_access_token: SecretStr = Field(
        default=SecretStr(""),
        description="Channel access token used for profile lookups",
    )
    api_base_url: str = Field(
        default="https://api.line.me",
        description="LINE Messaging API base URL",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for calls to the LINE API",
        gt=0,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="TALKROOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Talkroom", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def firestore(self) -> FirestoreSettings:
        """Get document store settings."""
        return get_firestore_settings()

    @property
    def line(self) -> LineSettings:
        """Get LINE API settings."""
        return get_line_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_firestore_settings() -> FirestoreSettings:
    """Get cached document store settings."""
    return FirestoreSettings()


@lru_cache
def get_line_settings() -> LineSettings:
    """Get cached LINE API settings."""
    return LineSettings()
