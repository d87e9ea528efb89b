"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Mock authentication - the user id is taken from this header without verification
    user_id_header: str = Field(default="X-User-Id", validation_alias="USER_ID_HEADER")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    # Pagination and list sizes
    default_page_limit: int = Field(default=20, validation_alias="DEFAULT_PAGE_LIMIT")
    max_page_limit: int = Field(default=100, validation_alias="MAX_PAGE_LIMIT")
    tag_search_limit: int = Field(default=20, validation_alias="TAG_SEARCH_LIMIT")
    popular_tags_limit: int = Field(default=10, validation_alias="POPULAR_TAGS_LIMIT")

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
