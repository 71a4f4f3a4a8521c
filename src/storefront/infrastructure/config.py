"""Runtime configuration, read from the environment and ``.env``.

Every variable is prefixed with ``STOREFRONT_``, e.g.
``STOREFRONT_SALEOR_API_URL``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Commerce backend
    saleor_api_url: str = "http://localhost:8000/graphql/"
    channel: str = "default-channel"
    variant_id: str = "UHJvZHVjdFZhcmlhbnQ6MQ=="
    quantity: int = 1
    payment_app_id: str = "saleor.io.stripe"
    account_redirect_url: str = "http://localhost:3000/login"
    http_timeout: float = 10.0

    # Content service
    content_api_url: str | None = None
    checkout_image_slug: str = "test-image-test"

    # Session
    environment: str = "development"
    session_cookie_name: str = "saleor_token"

    # CLI state between invocations
    data_dir: Path = Path("data")

    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
