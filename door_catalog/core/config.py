# door_catalog/core/config.py

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings
    DATABASE_URL: str = ""
    DB_ECHO: bool = False

    # Import pipeline
    DATA_DIR: str = "public/data"
    SUPPLIER_ID: Optional[str] = None   # Supplier used by attach/reattach when no --supplier-id is given
    DEFAULT_DOOR_PRICE: float = 500.0
    DEFAULT_LEAD_TIME: str = "2-3 weeks"
    REATTACH_BASE_PRICE: float = 100.0

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL with postgresql:// rewritten for the asyncpg driver"""
        url = self.DATABASE_URL or os.environ.get('DATABASE_URL', '')
        if not url:
            raise ValueError("DATABASE_URL is not set in environment variables")
        if url.startswith('postgresql://'):
            url = url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return url

    def data_file(self, filename: str) -> Path:
        return Path(self.DATA_DIR) / filename


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
