"""Application configuration using Pydantic Settings."""
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "Lesson Planner"
    debug: bool = False
    log_level: str = "INFO"

    # MongoDB (transactions need a replica set, e.g. mongodb://localhost:27017/?replicaSet=rs0)
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "lesson_planner"

    # JWT (tokens are issued by the auth service; we only verify them)
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:3000"

    # Billing state is written by the Stripe webhook service
    subscription_gating_enabled: bool = True

    # Calendar
    holiday_week_policy: Literal["partial", "full"] = "partial"
    calendar_max_range_days: int = 120

    @model_validator(mode="after")
    def _validate_production_secrets(self):
        if not self.debug:
            if self.jwt_secret_key in ("change-me-in-production", ""):
                raise ValueError(
                    "JWT_SECRET_KEY must be set to the auth service's signing secret when DEBUG is not enabled."
                )
        return self


settings = Settings()
