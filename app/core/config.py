"""Application configuration."""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

PLACEHOLDER_API_KEY = "your_gemini_api_key_here"


# Find .env file - check multiple possible locations
def find_env_file() -> Optional[Path]:
    """Find .env file in multiple possible locations."""
    current_dir = os.path.dirname(os.path.abspath(__file__))

    possible_paths = [
        os.path.join(current_dir, ".env"),
        os.path.join(os.path.dirname(current_dir), ".env"),
        os.path.join(os.path.dirname(os.path.dirname(current_dir)), ".env"),
    ]

    for path_str in possible_paths:
        if os.path.exists(path_str):
            path = Path(path_str)
            LOGGER.info(f"Found .env file at: {path}")
            return path

    LOGGER.warning("No .env file found in expected locations")
    return None


ENV_FILE = find_env_file()


class CraftSettings(BaseSettings):
    """Craft document store connection settings."""
    api_base: str = Field(
        default="https://connect.craft.do/links/Hw5oNoYJQoE/api/v1",
        validation_alias="CRAFT_API_BASE",
    )
    collection_name: str = Field(default="CallSheetAPI", validation_alias="CRAFT_COLLECTION_NAME")
    timeout: int = Field(default=30, validation_alias="CRAFT_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",  # No prefix for nested settings
    )


class LLMSettings(BaseSettings):
    """Knowledge service (Gemini) settings."""

    gemini_api_key: str = Field(default="", validation_alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash", validation_alias="GEMINI_MODEL")
    search_grounding: bool = Field(default=True, validation_alias="GEMINI_SEARCH_GROUNDING")
    timeout: int = Field(default=90, validation_alias="LLM_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.gemini_api_key) and self.gemini_api_key != PLACEHOLDER_API_KEY

    def model_post_init(self, __context) -> None:
        """Log settings after initialization."""
        LOGGER.info(f"Gemini model: {self.gemini_model}")
        LOGGER.info(f"Gemini API Key present: {self.is_configured}")


class LocaleSettings(BaseSettings):
    """Locale used when a shoot date has to be assumed."""
    timezone: str = Field(default="Australia/Sydney", validation_alias="SHOOT_TIMEZONE")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )


class Settings(BaseSettings):
    """Unified application settings with nested models."""

    # Application Settings
    app_name: str = Field(default="CallSheetCraft", validation_alias="APP_NAME")
    app_version: str = "0.1.0"
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=True, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # API Settings
    api_prefix: str = "/api"
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")

    # Nested Settings
    craft: CraftSettings = Field(default_factory=lambda: CraftSettings())
    llm: LLMSettings = Field(default_factory=lambda: LLMSettings())
    locale: LocaleSettings = Field(default_factory=lambda: LocaleSettings())

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def craft_api_base(self) -> str:
        return self.craft.api_base

    @property
    def gemini_api_key(self) -> str:
        return self.llm.gemini_api_key

    @property
    def gemini_model(self) -> str:
        return self.llm.gemini_model

    @property
    def gemini_configured(self) -> bool:
        return self.llm.is_configured

    @property
    def shoot_timezone(self) -> str:
        return self.locale.timezone


# Initialize settings
settings = Settings()

LOGGER.info(f"Settings initialized with environment: {settings.environment}")
