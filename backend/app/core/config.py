from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    tick_interval_sec: float = 1.0
    warning_threshold_sec: int = 10
    cors_allow_origins: List[str] = ["*"]
    static_dir: str = "frontend/static"

    model_config = {
        "env_file": ".env",
        "env_prefix": "",
        "extra": "ignore",
    }

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
