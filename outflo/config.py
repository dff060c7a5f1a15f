from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    DEV_MODE: bool = False
    FRONTEND_URL: str = "http://localhost:5173"  # Vite dev server
    LOG_LEVEL: str = "INFO"
    PORT: int = 8000

    # Database (required)
    DATABASE_URL: str

    # API Settings
    API_PREFIX: str = "/api/v1"

    # Generation credentials; the API refuses to start without one of them
    GEMINI_API_KEY: str = ""
    AI_MODEL: str = "gemini-2.0-flash"
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"

    # LinkedIn scrape credentials (only the ingestion job needs them)
    LINKEDIN_COOKIES: str = ""
    LINKEDIN_CSRF_TOKEN: str = ""


@lru_cache
def get_settings() -> Settings:
    """Load settings once; raises pydantic.ValidationError if DATABASE_URL is missing."""
    return Settings()
