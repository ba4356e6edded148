"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache

from permitgate.validators.models import ValidationOptions


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: list[str] = ["*"]

    # Validation
    VALIDATION_STRIP_UNKNOWN: bool = True
    VALIDATION_CONVERT: bool = True
    VALIDATION_ABORT_EARLY: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def validation_options(self) -> ValidationOptions:
        """Engine options for request validation."""
        return ValidationOptions(
            strip_unknown=self.VALIDATION_STRIP_UNKNOWN,
            convert=self.VALIDATION_CONVERT,
            abort_early=self.VALIDATION_ABORT_EARLY,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
