"""
Configuration module for the storefront core.

This module provides centralized configuration management using Pydantic settings.
All configuration values can be overridden via environment variables or .env file.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for the storefront core.

    Attributes:
        APP_NAME: Display name used in log output
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Render logs as JSON instead of console format
        CART_STORAGE_KEY: Key under which the cart collection is persisted
        STORAGE_PATH: Directory used by the file-backed persisted store
        PLACEHOLDER_IMAGE: Image reference used when a product has none
        DEFAULT_PRODUCT_NAME: Name given to cart items added without one
        SEARCH_MAX_RESULTS: Maximum number of search suggestions
        SEARCH_BROWSE_LIMIT: Number of entries shown for an empty query
        CURRENCY_SYMBOL: Symbol prefixed to formatted prices
    """

    APP_NAME: str = Field(default="Tech-Shop", description="Display name")

    # Logging configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(default=False, description="Emit JSON log lines")

    # Persisted store
    CART_STORAGE_KEY: str = Field(
        default="ts_cart",
        description="Key holding the serialized cart collection",
    )
    STORAGE_PATH: str = Field(
        default=".storefront",
        description="Directory for the file-backed store",
    )

    # Catalog defaults
    PLACEHOLDER_IMAGE: str = Field(default="./placeholder.png")
    DEFAULT_PRODUCT_NAME: str = Field(default="Product")

    # Search suggestions
    SEARCH_MAX_RESULTS: int = Field(default=12, ge=1, le=100)
    SEARCH_BROWSE_LIMIT: int = Field(default=8, ge=0, le=100)

    CURRENCY_SYMBOL: str = Field(default="₹")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("CART_STORAGE_KEY")
    @classmethod
    def validate_storage_key(cls, value: str) -> str:
        """
        Validate that the storage key is usable.

        Raises:
            ValueError: If the key is blank
        """
        value = value.strip()
        if not value:
            raise ValueError("Cart storage key cannot be empty")
        return value


# Global settings instance
settings = Settings()
