"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    logs_dir: str = "logs"

    # Lifespan input bounds (mirrors the number input: min 1, max 120, default 80)
    default_lifespan_years: int = 80
    min_lifespan_years: int = 1
    max_lifespan_years: int = 120

    # Storage
    preferences_path: str = "~/.life_calendar/preferences.json"
    image_output_dir: str = "~/.life_calendar/images"

    # Reflection (LiteLLM model string, e.g. "gemini/gemini-2.0-flash")
    llm_model: str = "gemini/gemini-2.0-flash"
    reflection_temperature: float = 0.8
    reflection_top_p: float = 0.9
    reflection_max_tokens: int = 200
    reflection_timeout: float = 30.0
    reflection_language: str = "English"

    # API Keys (optional, loaded from env)
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    @field_validator("min_lifespan_years", "max_lifespan_years", "default_lifespan_years")
    @classmethod
    def lifespan_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("lifespan bounds must be >= 1")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    def preferences_file(self) -> Path:
        return Path(self.preferences_path).expanduser()

    def image_dir(self) -> Path:
        return Path(self.image_output_dir).expanduser()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
