"""ERP Console: Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Storage ("memory://" keeps everything in-process)
    STORAGE_URL: str = "sqlite:///./data/erp_console.db"
    STORAGE_SCHEMA_VERSION: int = 1
    SEED_DEMO_DATA: bool = True

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60
    LOGIN_DELAY_SECONDS: float = 0.5

    # Timezone
    TIMEZONE: str = "America/Sao_Paulo"

    # Business defaults
    LOW_STOCK_THRESHOLD: int = 10
    DEFAULT_PAGE_SIZE: int = 10
    ORDER_NUMBER_PREFIX: str = "ORD"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
