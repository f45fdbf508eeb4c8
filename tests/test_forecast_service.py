"""
End-to-end forecasting service tests against seeded orders.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date, timedelta

import pytest

from engine.exceptions import InsufficientData, InvalidMetric
from engine.forecast.projector import ForecastPoint, ForecastResult
from services.forecast_service import ForecastService
from store.forecasts import ForecastStore

TODAY = date(2026, 3, 15)


def _service(**kwargs):
    return ForecastService(clock=lambda: TODAY, **kwargs)


class DummySource:
    def __init__(self):
        self.calls = []

    def daily_totals(self, tenant_id, metric_type, since):
        self.calls.append((tenant_id, metric_type, since))
        return []

    def tenant_ids(self):
        return []


class DummyStore:
    def __init__(self):
        self.calls = []

    def store(self, tenant_id, metric_type, result, today=None):
        self.calls.append((tenant_id, metric_type, result, today))
        return len(result.forecasts)

    def retrieve(self, tenant_id, metric_type, days_ahead=30, today=None):
        return None


def test_linear_revenue_week_forecasts_tomorrow(seed_orders):
    values = [100, 110, 120, 130, 140, 150, 160]
    seed_orders("acme", {TODAY - timedelta(days=7 - i): [v] for i, v in enumerate(values)})

    result = _service().generate_forecast("acme", "revenue", days_ahead=1, historical_days=7)

    assert result.r_squared == pytest.approx(1.0)
    assert result.historical_days_used == 7
    assert result.forecasts == [ForecastPoint(TODAY + timedelta(days=1), 170.0, 170.0, 170.0)]


def test_gap_days_reduce_historical_days_used(seed_orders):
    # ten calendar days, three without orders
    days = [TODAY - timedelta(days=d) for d in range(1, 11) if d not in (3, 5, 8)]
    seed_orders("acme", {day: [10.0, 20.0] for day in days})

    result = _service().generate_forecast("acme", "transactions", days_ahead=3, historical_days=30)

    assert result.historical_days_used == 7
    assert [p.predicted_value for p in result.forecasts] == [2.0, 2.0, 2.0]
    assert result.r_squared == 0.0


def test_insufficient_history_writes_nothing(seed_orders):
    seed_orders("acme", {TODAY - timedelta(days=d): [50.0] for d in range(1, 7)})
    store = DummyStore()
    service = _service(store=store)

    with pytest.raises(InsufficientData) as excinfo:
        service.generate_forecast("acme", "revenue")
    assert "7 days" in str(excinfo.value)
    assert store.calls == []


def test_history_outside_lookback_is_ignored(seed_orders):
    seed_orders("acme", {TODAY - timedelta(days=d): [50.0] for d in range(20, 30)})
    with pytest.raises(InsufficientData):
        _service().generate_forecast("acme", "revenue", historical_days=14)


def test_invalid_metric_never_touches_source():
    source = DummySource()
    with pytest.raises(InvalidMetric):
        _service(source=source).generate_forecast("acme", "bogus_metric", 30, 90)
    assert source.calls == []


@pytest.mark.parametrize("days_ahead", [0, 366])
def test_days_ahead_out_of_range(days_ahead):
    source = DummySource()
    with pytest.raises(ValueError):
        _service(source=source).generate_forecast("acme", "revenue", days_ahead=days_ahead)
    assert source.calls == []


def test_persist_then_get_round_trip(seed_orders):
    seed_orders("acme", {TODAY - timedelta(days=d): [float(100 - d)] for d in range(1, 15)})
    service = _service(store=ForecastStore())

    assert service.get_forecast("acme", "revenue") is None

    result = service.generate_forecast("acme", "revenue", days_ahead=5)
    assert service.persist_forecast("acme", "revenue", result) == 5
    assert service.persist_forecast("acme", "revenue", result) == 5

    loaded = service.get_forecast("acme", "revenue", days_ahead=5)
    assert loaded.forecasts == result.forecasts
    assert loaded.r_squared == pytest.approx(result.r_squared, abs=1e-4)
    assert loaded.historical_days_used == 14
    assert service.get_forecast("other", "revenue") is None


def test_persist_uses_service_clock():
    store = DummyStore()
    service = _service(source=DummySource(), store=store)
    service.persist_forecast("acme", "revenue", ForecastResult(forecasts=[], r_squared=0.0))
    assert store.calls[0][3] == TODAY
