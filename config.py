"""
Constants and configuration for Salescast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List

from pydantic_settings import BaseSettings


SALESCAST_DATABASE_URL: str = os.getenv("SALESCAST_DATABASE_URL", "sqlite:///salescast.db")
SALESCAST_LOG_LEVEL: str = os.getenv("SALESCAST_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# z multiplier for a two-sided 95% band
CONFIDENCE_Z_95: float = 1.96

# metrics produced by the nightly run, in processing order
DAILY_FORECAST_METRICS: List[str] = ["revenue", "transactions", "average_ticket"]


class Settings(BaseSettings):
    database_url: str = SALESCAST_DATABASE_URL
    db_pool_size: int = int(os.getenv("SALESCAST_DB_POOL_SIZE", "10"))
    db_max_overflow: int = int(os.getenv("SALESCAST_DB_MAX_OVERFLOW", "20"))
    db_pool_timeout: int = int(os.getenv("SALESCAST_DB_POOL_TIMEOUT", "30"))
    db_pool_recycle: int = int(os.getenv("SALESCAST_DB_POOL_RECYCLE", "1800"))

    log_level: str = SALESCAST_LOG_LEVEL

    # minimum number of days with sales before a regression is attempted
    forecast_min_history_days: int = 7
    forecast_default_days_ahead: int = 30
    forecast_max_days_ahead: int = 365
    forecast_default_historical_days: int = 90
    forecast_confidence_z: float = CONFIDENCE_Z_95
    # decimal places kept on predicted values and bounds
    forecast_value_precision: int = 2

    daily_forecast_metrics: List[str] = DAILY_FORECAST_METRICS

    model_config = {
        "env_prefix": "SALESCAST_",
        "extra": "ignore",
    }


settings = Settings()
