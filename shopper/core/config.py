"""Shopper Configuration"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    # Storefront API
    store_base_url: str = "http://localhost:8001"
    request_timeout: float = 30.0

    # JSON file holding cart/user/products between runs; unset keeps state in memory
    state_file: Optional[str] = None

    class Config:
        env_prefix = "SHOPPER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
