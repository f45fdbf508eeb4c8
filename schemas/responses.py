"""
Response models used to serialize forecast results.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from engine.forecast.projector import ForecastResult
from services.daily_forecast import DailyRunSummary


class ForecastPointResponse(BaseModel):

    predicted_date: date
    predicted_value: float
    confidence_lower: float
    confidence_upper: float


class ForecastResponse(BaseModel):

    forecasts: List[ForecastPointResponse] = Field(default_factory=list)
    r_squared: float
    algorithm: str
    historical_days_used: Optional[int] = None
    stored: Optional[int] = None

    @classmethod
    def from_result(cls, result: ForecastResult, stored: Optional[int] = None) -> ForecastResponse:
        return cls(
            forecasts=[ForecastPointResponse(**vars(p)) for p in result.forecasts],
            r_squared=result.r_squared,
            algorithm=result.algorithm,
            historical_days_used=result.historical_days_used,
            stored=stored,
        )


class DailyRunResponse(BaseModel):

    tenants_processed: int
    tenants_failed: int
    forecasts_stored: int
    skipped: List[Tuple[str, str]] = Field(default_factory=list)
    failures: List[Tuple[str, str, str]] = Field(default_factory=list)
    elapsed_seconds: float

    @classmethod
    def from_summary(cls, summary: DailyRunSummary) -> DailyRunResponse:
        return cls(**vars(summary))
