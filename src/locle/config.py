"""Runtime configuration for Locle."""

from datetime import date

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="LOCLE_", env_file=".env", extra="ignore")

    app_name: str = "locle"
    log_level: str = "INFO"
    data_dir: str = Field(
        default="~/.locle",
        description="Directory where saved progress, statistics and preferences are written.",
    )
    epoch_date: date = Field(default=date(2026, 1, 1), description="Date of daily puzzle #1.")
    max_distance_km: float = Field(default=470.0, gt=0)
    store_history_enabled: bool = False
    history_limit: int = Field(default=10, ge=1)
    time_trial_easy_seconds: float = Field(default=90.0, gt=0)
    time_trial_medium_seconds: float = Field(default=60.0, gt=0)
    time_trial_hard_seconds: float = Field(default=30.0, gt=0)
    share_url: str = "https://locle.app"


settings = Settings()
