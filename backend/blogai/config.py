"""Application configuration using Pydantic Settings."""
from datetime import tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # Application
    APP_NAME: str = "BlogAI"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    APP_URL: str = "http://localhost:3000"  # public base URL for published posts

    # Database
    DATABASE_URL: str = "sqlite:///./data/blogai.db"

    # Redis (Celery broker + result backend)
    REDIS_URL: str = "redis://redis:6379/0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Shared secret for the scheduled dispatch trigger
    CRON_SECRET: str = ""

    # LLM provider
    LLM_PROVIDER: str = "anthropic"          # anthropic | openai | ollama
    LLM_MODEL: str = "claude-3-sonnet-20240229"
    LLM_API_KEY: str = ""
    OLLAMA_URL: str = "http://host.docker.internal:11434"

    # Dispatcher
    DISPATCH_BATCH_SIZE: int = 3              # jobs claimed per pass
    DISPATCH_INTERVAL_SECONDS: float = 60.0   # beat schedule period
    STALE_JOB_TIMEOUT_SECONDS: int = 600      # generating longer than this -> failed

    # Intake quota
    DAILY_JOB_QUOTA: int = 5
    QUOTA_TIMEZONE: str = ""                  # IANA name; empty = server local time

    # Generation
    GENERATION_TEMPERATURE: float = 0.7
    REWRITE_MAX_TOKENS: int = 2048
    KEYWORD_MAX_TOKENS: int = 512
    KEYWORD_TEMPERATURE: float = 0.3
    KEYWORD_CONTENT_LIMIT: int = 2000         # chars of content sent for extraction

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def quota_tz(self) -> tzinfo | None:
        """Timezone of the quota day boundary (None = server local time)."""
        if not self.QUOTA_TIMEZONE:
            return None
        return ZoneInfo(self.QUOTA_TIMEZONE)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
