"""Application settings and configuration.

This module defines all configuration options for the Murmur API.
Settings are loaded from environment variables with sensible defaults and are
read once, when the process builds its application context.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    The signing secret has no default and must always be provided.
    """

    # Application metadata
    app_name: str = Field(default="Murmur API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=3000, alias="PORT")

    # Store connection
    database_url: str = Field(default="sqlite:///./murmur.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_secret: str = Field(alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 5,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Uploaded files land here and are served read-only under /uploads
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        """Return True when the configured store is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        """Return True for a private in-memory SQLite database.

        Such a database lives only as long as its single connection, so the
        engine has to share one connection across threads.
        """
        url = self.database_url
        return url in {"sqlite://", "sqlite:///:memory:"}
