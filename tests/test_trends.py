"""
Test cases for historical trend extraction and metric validation.
"""

from datetime import date, datetime

import pytest

from engine.enums import MetricType
from engine.exceptions import InvalidMetric
from engine.trends import TrendPoint, get_historical_trends, lookback_start


class DummySource:
    def __init__(self, points=None):
        self.calls = []
        self.points = points or []

    def daily_totals(self, tenant_id, metric_type, since):
        self.calls.append((tenant_id, metric_type, since))
        return self.points

    def tenant_ids(self):
        return []


def test_invalid_metric_fails_before_reading():
    source = DummySource()
    with pytest.raises(InvalidMetric) as excinfo:
        get_historical_trends(source, "t1", "bogus_metric", 90)
    assert "bogus_metric" in str(excinfo.value)
    assert source.calls == []


def test_passes_parsed_metric_and_window_start():
    points = [TrendPoint(date(2026, 3, 1), 12.0), TrendPoint(date(2026, 3, 3), 4.5)]
    source = DummySource(points)

    trends = get_historical_trends(source, "t1", "average_ticket", 10, today=date(2026, 3, 15))

    assert trends == points
    assert source.calls == [("t1", MetricType.average_ticket, datetime(2026, 3, 5, 0, 0))]


def test_days_must_be_positive():
    source = DummySource()
    with pytest.raises(ValueError):
        get_historical_trends(source, "t1", "revenue", 0)
    assert source.calls == []


def test_lookback_start_is_midnight():
    assert lookback_start(date(2026, 1, 10), 90) == datetime(2025, 10, 12)
