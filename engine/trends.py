"""
Historical trend extraction: one aggregated value per calendar day with sales.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, List, Optional

from engine.enums import MetricType

if TYPE_CHECKING:
    from datasources.base import OrderHistorySource


@dataclass(frozen=True)
class TrendPoint:
    date: date
    value: float


def lookback_start(today: date, days: int) -> datetime:
    return datetime.combine(today - timedelta(days=days), time.min)


def get_historical_trends(
    source: OrderHistorySource,
    tenant_id: str,
    metric_type: str | MetricType,
    days: int = 90,
    today: Optional[date] = None,
) -> List[TrendPoint]:
    metric = MetricType.parse(metric_type)
    if days < 1:
        raise ValueError(f"days must be a positive integer, got {days}")
    if today is None:
        today = date.today()
    return list(source.daily_totals(tenant_id, metric, lookback_start(today, days)))
