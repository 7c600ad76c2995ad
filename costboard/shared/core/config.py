from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator


class Settings(BaseSettings):
    """
    Main configuration for Costboard analytics.
    Uses Pydantic-Settings for environment variable parsing from .env.
    """
    APP_NAME: str = "Costboard"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # local, development, staging, production
    TESTING: bool = False
    LOG_LEVEL: str = "INFO"

    # Cost summary
    TOP_COST_DRIVERS: int = 5
    PROJECTION_DAYS: int = 30  # Average daily spend x days = projected monthly
    PERCENTAGE_PRECISION: int = 1

    # Trend comparison (days in each of the two compared windows)
    TREND_WINDOW_DAYS: int = 7

    # Resource inventory
    DEFAULT_PAGE_SIZE: int = 10

    @model_validator(mode='after')
    def validate_analytics_config(self) -> 'Settings':
        """Reject values that would make summaries or pagination undefined."""
        for name in ("TOP_COST_DRIVERS", "PROJECTION_DAYS", "DEFAULT_PAGE_SIZE", "TREND_WINDOW_DAYS"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer, got {getattr(self, name)}.")

        if self.PERCENTAGE_PRECISION < 0:
            raise ValueError("PERCENTAGE_PRECISION cannot be negative.")

        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore"
    )


@lru_cache
def get_settings():
    """Returns a singleton instance of the application settings."""
    return Settings()
