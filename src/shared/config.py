"""Runtime configuration.

Settings are read from ``STOREFRONT_*`` environment variables (and an optional
``.env`` file). ``STOREFRONT_ENV`` selects the overlay the process runs under:

    - "development" → console log rendering, local SQLite file
    - "test"        → same, databases are created per test by the fixtures
    - "production"  → set ``STOREFRONT_LOG_JSON=true`` and a real ``DATABASE_URI``
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")

    env: str = "development"

    database_uri: str = "sqlite:///storefront.db"
    database_echo: bool = False

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 60 * 24

    # Flat shipping charged on every order
    shipping_amount: Decimal = Field(default=Decimal("0.00"), ge=0)

    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
