"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export GEMINI_API_KEY=your-key
        export AI_REQUEST_TIMEOUT=15
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Nexus AI Assistant"

    DEBUG: bool = False

    # CORS_ORIGINS: Browser origins allowed to call the API (the chat front end)
    # Accepts a JSON list in the environment: CORS_ORIGINS='["https://nexus.example"]'
    CORS_ORIGINS: List[str] = ["*"]

    # ---------------------------------------------------------------------------
    # AI/LLM PROVIDER SETTINGS
    # ---------------------------------------------------------------------------
    # GEMINI_API_KEY: Google's Gemini API key
    # - Empty key does not crash startup; every call reports "API key missing"
    GEMINI_API_KEY: str = ""

    # GEMINI_MODEL: Intent classification (JSON mode, constrained schema)
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # GEMINI_SEARCH_MODEL: Grounded search and video lookup (google_search tool)
    GEMINI_SEARCH_MODEL: str = "gemini-2.5-flash"

    # AI_REQUEST_TIMEOUT: Bounded wait per model call, in seconds
    # - Classifier timeout ends the turn with the generic error message
    # - Secondary lookup timeout degrades only the branch that made the call
    AI_REQUEST_TIMEOUT: int = 30


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from nexus.core.config import settings
settings = Settings()
