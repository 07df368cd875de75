"""Application settings and configuration.

This module defines all configuration options for the Knit server.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files. The
    storage URL and key have no defaults: when either is missing the data
    layer stays disabled for the lifetime of the process.
    """

    # Application metadata
    app_name: str = Field(default="Knit API", alias="KNIT_APP_NAME")
    app_version: str = Field(default="0.1.0", alias="KNIT_APP_VERSION")
    debug: bool = Field(default=False, alias="KNIT_DEBUG")
    log_level: str = Field(default="INFO", alias="KNIT_LOG_LEVEL")

    # Relational storage
    storage_url: str | None = Field(default=None, alias="KNIT_STORAGE_URL")
    storage_key: str | None = Field(default=None, alias="KNIT_STORAGE_KEY")
    sql_debug: bool = Field(default=False, alias="KNIT_SQL_DEBUG")

    # Identity provider tokens (issued elsewhere, verified here)
    auth_jwt_secret: str = Field(default="", alias="KNIT_AUTH_JWT_SECRET")
    auth_jwt_algorithm: str = Field(default="HS256", alias="KNIT_AUTH_JWT_ALGORITHM")
    auth_jwt_audience: str | None = Field(
        default="authenticated",
        alias="KNIT_AUTH_JWT_AUDIENCE",
    )

    # Map tiles
    map_tile_url: str = Field(
        default="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        alias="KNIT_MAP_TILE_URL",
    )
    map_attribution: str = Field(
        default="&copy; OpenStreetMap contributors",
        alias="KNIT_MAP_ATTRIBUTION",
    )
    map_default_latitude: float = Field(default=37.7749, alias="KNIT_MAP_DEFAULT_LATITUDE")
    map_default_longitude: float = Field(default=-122.4194, alias="KNIT_MAP_DEFAULT_LONGITUDE")
    map_default_zoom: int = Field(default=12, alias="KNIT_MAP_DEFAULT_ZOOM")

    # Search result caps
    search_community_limit: int = Field(default=20, alias="KNIT_SEARCH_COMMUNITY_LIMIT")
    search_people_limit: int = Field(default=50, alias="KNIT_SEARCH_PEOPLE_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="KNIT_CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="KNIT_CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="KNIT_CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="KNIT_CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def storage_configured(self) -> bool:
        """Return True when both the storage URL and access key are present."""
        return bool(self.storage_url) and bool(self.storage_key)


settings = Settings()
