"""
Forecast projection: extends a fitted regression line past the end of the trend
series and attaches a constant-width confidence band to every projected day.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from config import settings
from engine.enums import Algorithm
from engine.exceptions import InsufficientData
from engine.forecast.regression import RegressionModel, fit
from engine.trends import TrendPoint


@dataclass(frozen=True)
class ForecastPoint:
    predicted_date: date
    predicted_value: float
    confidence_lower: float
    confidence_upper: float


@dataclass(frozen=True)
class ForecastResult:
    forecasts: List[ForecastPoint] = field(default_factory=list)
    r_squared: float = 0.0
    algorithm: str = Algorithm.linear_regression.value
    historical_days_used: Optional[int] = None


def round_half_up(value: float, precision: int) -> float:
    # halves round away from zero
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def confidence_half_width(model: RegressionModel, z: float | None = None) -> float:
    if z is None:
        z = settings.forecast_confidence_z
    return z * model.standard_error


def project(
    model: RegressionModel,
    days_ahead: int,
    today: date,
    precision: int | None = None,
) -> List[ForecastPoint]:
    if precision is None:
        precision = settings.forecast_value_precision
    half_width = confidence_half_width(model)

    points: List[ForecastPoint] = []
    for i in range(1, days_ahead + 1):
        raw = model.predict(model.n + i)
        points.append(ForecastPoint(
            predicted_date=today + timedelta(days=i),
            predicted_value=max(0.0, round_half_up(raw, precision)),
            confidence_lower=max(0.0, round_half_up(raw - half_width, precision)),
            confidence_upper=round_half_up(raw + half_width, precision),
        ))
    return points


def linear_regression(
    trends: Sequence[TrendPoint],
    days_ahead: int,
    today: date,
    min_points: int | None = None,
) -> ForecastResult:
    if min_points is None:
        min_points = settings.forecast_min_history_days
    if days_ahead < 1:
        raise ValueError(f"days_ahead must be at least 1, got {days_ahead}")
    if len(trends) < min_points:
        raise InsufficientData(found=len(trends), required=min_points)

    model = fit(trends)
    return ForecastResult(
        forecasts=project(model, days_ahead, today),
        r_squared=model.r_squared,
        algorithm=Algorithm.linear_regression.value,
        historical_days_used=model.n,
    )
