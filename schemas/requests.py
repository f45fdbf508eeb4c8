"""
Request models validated before a forecast operation runs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from config import settings
from engine.enums import MetricType


class TenantScopedRequest(BaseModel):
    tenant_id: str = Field(min_length=1)
    metric_type: MetricType
    days_ahead: int = Field(default=settings.forecast_default_days_ahead, ge=1, le=settings.forecast_max_days_ahead)

    @field_validator("tenant_id")
    @classmethod
    def _strip_tenant(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("tenant_id must not be blank")
        return value


class ForecastRequest(TenantScopedRequest):
    historical_days: int = Field(default=settings.forecast_default_historical_days, ge=1)
    persist: bool = False


class StoredForecastQuery(TenantScopedRequest):
    pass


class DailyRunRequest(BaseModel):
    tenant_ids: Optional[List[str]] = None
    metrics: Optional[List[MetricType]] = None
    days_ahead: int = Field(default=settings.forecast_default_days_ahead, ge=1, le=settings.forecast_max_days_ahead)
