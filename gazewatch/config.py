"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "gazewatch"
    debug: bool = False
    log_level: str = "INFO"

    # Segmentation
    gap_threshold_seconds: float = 20.0
    min_period_seconds: float = 1.0

    # Chart buckets
    hour_bucket_cap_minutes: int = 60
    day_bucket_cap_hours: float = 10.0
    week_days: int = 7
    month_days: int = 31

    # Response log
    responses_page_limit: int = 50

    model_config = {"env_prefix": "GAZEWATCH_"}


settings = Settings()
