from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("POSTGRES_URL", "DATABASE_URL")
    )
    DB_SSL: str = "require"
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10

    # Auth
    SECRET_KEY: str = "insecure-dev-key-change-me-before-deploying"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    SESSION_COOKIE_NAME: str = "session"

    # Dashboard
    INVOICES_PATH: str = "/dashboard/invoices"
    LOGIN_REDIRECT: str = "/dashboard"
    QUERY_AMOUNT_THRESHOLD: int = 666
    CACHE_DIR: str = ".cache/views"
    VIEW_CACHE_TTL: int = 60  # seconds

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

settings = Settings()
