"""
Left OverCook - Configuration and settings.

All settings come from the environment (or a local .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM gateway (OpenAI-compatible)
    openai_api_key: str
    llm_base_url: str | None = None
    recipe_model: str = "gpt-4.1-mini"
    chat_model: str = "gpt-4.1-mini"
    recipe_temperature: float = 0.7
    chat_temperature: float = 0.5

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # Application
    overcook_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # OVERCOOK_LOG_PROMPTS=1 - log LLM prompts to local files (dev only)
    overcook_log_prompts: bool = False

    # Session-scoped recipe storage
    session_expire_hours: int = 24

    cors_origins: list[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
