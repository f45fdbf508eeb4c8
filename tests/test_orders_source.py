"""
SQL order history tests: per-day aggregation, gap days, window bounds and tenant isolation.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from datasources.orders import SqlOrderHistory
from engine.enums import MetricType
from engine.trends import TrendPoint

D1 = date(2026, 3, 1)
D2 = date(2026, 3, 2)
D4 = date(2026, 3, 4)
SINCE = datetime(2026, 3, 1)


@pytest.fixture
def history(seed_orders):
    seed_orders("acme", {
        date(2026, 2, 28): [999.0],
        D1: [10.0, 30.0],
        D2: [25.5],
        D4: [5.0, 10.0, 15.0],
    })
    seed_orders("other", {D1: [1000.0], D2: [2000.0]})
    return SqlOrderHistory()


def test_revenue_sums_per_day(history):
    assert history.daily_totals("acme", MetricType.revenue, SINCE) == [
        TrendPoint(D1, 40.0),
        TrendPoint(D2, 25.5),
        TrendPoint(D4, 30.0),
    ]


def test_transactions_count_per_day(history):
    assert history.daily_totals("acme", MetricType.transactions, SINCE) == [
        TrendPoint(D1, 2.0),
        TrendPoint(D2, 1.0),
        TrendPoint(D4, 3.0),
    ]


def test_average_ticket_per_day(history):
    rows = history.daily_totals("acme", MetricType.average_ticket, SINCE)
    assert [r.date for r in rows] == [D1, D2, D4]
    assert [r.value for r in rows] == pytest.approx([20.0, 25.5, 10.0])


def test_gap_days_are_absent_not_zero(history):
    rows = history.daily_totals("acme", MetricType.revenue, SINCE)
    assert date(2026, 3, 3) not in {r.date for r in rows}
    assert all(r.value > 0 for r in rows)


def test_orders_before_window_are_excluded(history):
    rows = history.daily_totals("acme", MetricType.revenue, SINCE - timedelta(days=1))
    assert rows[0] == TrendPoint(date(2026, 2, 28), 999.0)
    assert len(rows) == 4


def test_tenants_are_isolated(history):
    assert history.daily_totals("other", MetricType.revenue, SINCE) == [
        TrendPoint(D1, 1000.0),
        TrendPoint(D2, 2000.0),
    ]
    assert history.daily_totals("nobody", MetricType.revenue, SINCE) == []


def test_tenant_ids(history):
    assert history.tenant_ids() == ["acme", "other"]
