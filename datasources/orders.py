"""
SQL implementation of the order history source, aggregating the orders table by day.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List

from sqlalchemy import func, select

from database import get_db_session
from datasources.base import OrderHistorySource
from db_models import Order
from engine.enums import MetricType
from engine.trends import TrendPoint

log = logging.getLogger(__name__)


def _aggregate(metric_type: MetricType) -> Any:
    if metric_type is MetricType.revenue:
        return func.sum(Order.total)
    if metric_type is MetricType.transactions:
        return func.count(Order.id)
    return func.avg(Order.total)


def _as_date(value: Any) -> date:
    # sqlite hands DATE() back as text, postgres as a date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class SqlOrderHistory(OrderHistorySource):
    def daily_totals(self, tenant_id: str, metric_type: MetricType, since: datetime) -> List[TrendPoint]:
        day = func.date(Order.created_at).label("day")
        stmt = (
            select(day, _aggregate(metric_type).label("value"))
            .where(Order.tenant_id == tenant_id, Order.created_at >= since)
            .group_by(day)
            .order_by(day.asc())
        )
        with get_db_session() as db:
            rows = db.execute(stmt).all()
        log.debug("Loaded %d daily %s rows for tenant %s", len(rows), metric_type.value, tenant_id)
        return [TrendPoint(date=_as_date(row.day), value=float(row.value or 0.0)) for row in rows]

    def tenant_ids(self) -> List[str]:
        with get_db_session() as db:
            return list(db.scalars(select(Order.tenant_id).distinct().order_by(Order.tenant_id)).all())
