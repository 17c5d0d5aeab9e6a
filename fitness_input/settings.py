from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings loaded from environment variables.

    Values that vary per polling instance (session key, checkpoint directory,
    provider selection) arrive with the host configuration instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FITNESS_INPUT_", case_sensitive=False
    )

    app_name: str = "TA-GoogleFitness"
    owner: str = "nobody"
    management_url: str = "https://127.0.0.1:8089"
    http_timeout: float = 30.0
    checkpoint_fallback_hours: float = 2.0
    log_level: str = "INFO"

    google_fitness_api_url: str = "https://www.googleapis.com/fitness/v1"
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_app_marker: str = "apps.googleusercontent.com"

    fitbit_api_url: str = "https://api.fitbit.com"
    fitbit_token_url: str = "https://api.fitbit.com/oauth2/token"
    fitbit_app_marker: str = "fitbit-app"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
