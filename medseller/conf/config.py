"""Configuration for the MedSeller assistant.

Reads environment variables for data locations, intent-engine tuning
and the chat proxy used for remote fallback.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def resolve_data_path(value: str | Path) -> Path:
    """Resolve a configured path; relative paths are taken from the project root."""
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    # Data files
    CATALOG_PATH: str = Field(
        default="data/products.json", description="Product dataset (.json or .yaml)."
    )
    INTENTS_PATH: str = Field(
        default="data/intents.yaml",
        description="Keyword cues, lookup tables and response templates for the intent engine.",
    )
    TRANSLATIONS_PATH: str = Field(
        default="data/translations.yaml",
        description="Localized product names and descriptions keyed by product id.",
    )

    # Intent engine tuning
    PRICE_CHEAP_THRESHOLD: float = Field(
        default=200, ge=0, description="Products priced below this are listed as affordable."
    )
    PRICE_PREMIUM_THRESHOLD: float = Field(
        default=500, ge=0, description="Products priced above this are listed as premium."
    )
    RESULT_LIMIT: int = Field(
        default=5, gt=0, description="Maximum products rendered per answer."
    )
    SWEEP_RESULT_LIMIT: int = Field(
        default=3, gt=0, description="Maximum products rendered by the last-resort keyword sweep."
    )
    FEATURED_MAX_ID: int = Field(
        default=3, gt=0, description="Products with id up to this value are featured in recommendations."
    )
    MIN_TERM_LENGTH: int = Field(
        default=3, gt=0, description="Shortest query word used as a product search term."
    )

    @model_validator(mode="after")
    def _validate_price_tiers(self) -> "Settings":
        if self.PRICE_CHEAP_THRESHOLD >= self.PRICE_PREMIUM_THRESHOLD:
            raise ValueError("PRICE_CHEAP_THRESHOLD must be < PRICE_PREMIUM_THRESHOLD")
        return self

    # Display
    CURRENCY_SYMBOL: str = Field(default="₽", description="Currency symbol prefixed to prices.")
    DISPLAY_LOCALE: str = Field(
        default="en",
        description="Locale for product names and descriptions ('en' uses catalog text as-is).",
    )

    # Remote fallback (server-side chat proxy)
    CHAT_PROXY_URL: str = Field(
        default="http://localhost:8000/api/chat",
        description="Endpoint that forwards unresolved questions to the language model.",
    )
    CHAT_PROXY_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Request timeout for the chat proxy in seconds."
    )
    CHAT_PROXY_API_KEY: SecretStr = Field(
        default=SecretStr(""), description="Optional bearer token for the chat proxy."
    )

    # Runtime
    LOG_LEVEL: str = Field(default="INFO", description="Root log level.")
    LOG_JSON: bool = Field(default=False, description="Emit JSON log lines instead of pretty output.")
    PUBLIC_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Publicly reachable base URL of this service.",
    )

    @property
    def catalog_file(self) -> Path:
        return resolve_data_path(self.CATALOG_PATH)

    @property
    def intents_file(self) -> Path:
        return resolve_data_path(self.INTENTS_PATH)

    @property
    def translations_file(self) -> Path:
        return resolve_data_path(self.TRANSLATIONS_PATH)

    @property
    def is_production(self) -> bool:
        return self.PUBLIC_BASE_URL != "http://localhost:8000"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[arg-type]


def validate_required_settings(settings_instance: Settings | None = None) -> None:
    """
    Validate settings at startup.

    Raises:
        RuntimeError: If the intent tables are missing (the engine cannot run without them)
    """
    settings_instance = settings_instance or get_settings()
    errors: list[str] = []
    warnings: list[str] = []

    if not settings_instance.intents_file.exists():
        errors.append(f"INTENTS_PATH not found: {settings_instance.intents_file}")

    # A missing catalog is reported by the store itself; the service starts degraded.
    if not settings_instance.catalog_file.exists():
        warnings.append(f"CATALOG_PATH not found: {settings_instance.catalog_file}")

    if settings_instance.DISPLAY_LOCALE != "en" and not settings_instance.translations_file.exists():
        warnings.append(
            f"TRANSLATIONS_PATH not found, showing catalog text: {settings_instance.translations_file}"
        )

    if settings_instance.is_production:
        if "localhost" in settings_instance.CHAT_PROXY_URL:
            warnings.append("CHAT_PROXY_URL points to localhost (remote fallback will fail)")

    for warning in warnings:
        logger.warning("Configuration warning: %s", warning)

    if errors:
        error_msg = "Critical configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
        logger.error(error_msg)
        raise RuntimeError(error_msg)


settings = get_settings()
