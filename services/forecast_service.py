"""
Forecasting service exposing the public generate / persist / fetch operations
for a single tenant and metric.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from config import settings
from datasources.base import OrderHistorySource
from datasources.orders import SqlOrderHistory
from engine.enums import MetricType
from engine.forecast.projector import ForecastResult, linear_regression
from engine.trends import get_historical_trends
from store.forecasts import ForecastStore

log = logging.getLogger(__name__)


class ForecastService:
    """Stateless facade over trend extraction, regression and the forecast store.

    ``clock`` returns the "as-of" day; every operation reads it once so a run
    that straddles midnight still produces a single cohort.
    """

    def __init__(
        self,
        source: Optional[OrderHistorySource] = None,
        store: Optional[ForecastStore] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.source = source or SqlOrderHistory()
        self.store = store or ForecastStore()
        self.clock = clock

    def generate_forecast(
        self,
        tenant_id: str,
        metric_type: str | MetricType,
        days_ahead: int | None = None,
        historical_days: int | None = None,
    ) -> ForecastResult:
        if days_ahead is None:
            days_ahead = settings.forecast_default_days_ahead
        if historical_days is None:
            historical_days = settings.forecast_default_historical_days
        metric = MetricType.parse(metric_type)
        if not 1 <= days_ahead <= settings.forecast_max_days_ahead:
            raise ValueError(
                f"days_ahead must be between 1 and {settings.forecast_max_days_ahead}, got {days_ahead}"
            )

        today = self.clock()
        trends = get_historical_trends(self.source, tenant_id, metric, historical_days, today=today)
        result = linear_regression(trends, days_ahead, today)
        log.info(
            "Generated %s forecast for tenant %s: %d days ahead from %d days of history (r2=%.4f)",
            metric.value, tenant_id, days_ahead, result.historical_days_used, result.r_squared,
        )
        return result

    def persist_forecast(self, tenant_id: str, metric_type: str | MetricType, result: ForecastResult) -> int:
        return self.store.store(tenant_id, metric_type, result, today=self.clock())

    def get_forecast(
        self,
        tenant_id: str,
        metric_type: str | MetricType,
        days_ahead: int | None = None,
    ) -> Optional[ForecastResult]:
        if days_ahead is None:
            days_ahead = settings.forecast_default_days_ahead
        result = self.store.retrieve(tenant_id, metric_type, days_ahead, today=self.clock())
        if result is None:
            log.debug("No stored %s forecast for tenant %s today", metric_type, tenant_id)
        return result
