"""Storefront Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    cors_origins: list[str] = ["*"]

    # Document database. An empty URL selects the in-memory store.
    database_url: str = ""
    database_name: str = "storefront"

    # Reject orders whose prices disagree with the catalog
    verify_order_prices: bool = True

    # Seed the demo catalog into an empty in-memory store
    seed_catalog: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def uses_mongo(self) -> bool:
        """Check if a MongoDB connection is configured"""
        return bool(self.database_url)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
