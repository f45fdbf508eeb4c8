"""
Forecast persistence: one row per (tenant, forecast day, predicted day, metric,
algorithm), overwritten in place when a forecast is re-run on the same day.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from database import get_db_session
from db_models import AnalyticsForecast
from engine.enums import MetricType
from engine.forecast.projector import ForecastPoint, ForecastResult

log = logging.getLogger(__name__)


def _algorithm_params(result: ForecastResult) -> Dict[str, Any]:
    return {"historical_days_used": result.historical_days_used}


_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_COHORT_DAY_KEY = ("tenant_id", "forecast_date", "predicted_date", "metric_type", "algorithm")
_UPDATED_COLUMNS = ("predicted_value", "confidence_lower", "confidence_upper", "r_squared", "algorithm_params")


def _to_point(row: AnalyticsForecast) -> ForecastPoint:
    return ForecastPoint(
        predicted_date=row.predicted_date,
        predicted_value=float(row.predicted_value),
        confidence_lower=float(row.confidence_lower or 0.0),
        confidence_upper=float(row.confidence_upper or 0.0),
    )


def _upsert(db: Session, insert_fn: Any, values: Dict[str, Any]) -> None:
    stmt = insert_fn(AnalyticsForecast).values(id=str(uuid.uuid4()), **values)
    updates = {column: stmt.excluded[column] for column in _UPDATED_COLUMNS}
    updates["updated_at"] = func.now()
    db.execute(stmt.on_conflict_do_update(index_elements=list(_COHORT_DAY_KEY), set_=updates))


def _select_and_save(db: Session, values: Dict[str, Any]) -> None:
    row = db.scalars(
        select(AnalyticsForecast).filter_by(**{key: values[key] for key in _COHORT_DAY_KEY})
    ).one_or_none()
    if row is None:
        db.add(AnalyticsForecast(**values))
        return
    for column in _UPDATED_COLUMNS:
        setattr(row, column, values[column])


class ForecastStore:
    def store(
        self,
        tenant_id: str,
        metric_type: str | MetricType,
        result: ForecastResult,
        today: Optional[date] = None,
    ) -> int:
        metric = MetricType.parse(metric_type)
        forecast_date = today or date.today()
        params = _algorithm_params(result)

        rows = [
            {
                "tenant_id": tenant_id,
                "forecast_date": forecast_date,
                "predicted_date": point.predicted_date,
                "metric_type": metric.value,
                "algorithm": result.algorithm,
                "predicted_value": point.predicted_value,
                "confidence_lower": point.confidence_lower,
                "confidence_upper": point.confidence_upper,
                "r_squared": result.r_squared,
                "algorithm_params": dict(params),
            }
            for point in result.forecasts
        ]

        with get_db_session() as db:
            insert_fn = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
            for values in rows:
                if insert_fn is None:
                    _select_and_save(db, values)
                else:
                    # concurrent writers for the same cohort day resolve to the last write
                    _upsert(db, insert_fn, values)

        log.info("Stored %d %s forecast rows for tenant %s", len(rows), metric.value, tenant_id)
        return len(rows)

    def retrieve(
        self,
        tenant_id: str,
        metric_type: str | MetricType,
        days_ahead: int = 30,
        today: Optional[date] = None,
    ) -> Optional[ForecastResult]:
        metric = MetricType.parse(metric_type)
        today = today or date.today()
        end_date = today + timedelta(days=days_ahead)

        with get_db_session() as db:
            rows = db.scalars(
                select(AnalyticsForecast)
                .where(
                    AnalyticsForecast.tenant_id == tenant_id,
                    AnalyticsForecast.metric_type == metric.value,
                    AnalyticsForecast.forecast_date == today,
                    AnalyticsForecast.predicted_date >= today,
                    AnalyticsForecast.predicted_date <= end_date,
                )
                .order_by(AnalyticsForecast.predicted_date.asc())
            ).all()

            if not rows:
                return None

            first = rows[0]
            return ForecastResult(
                forecasts=[_to_point(row) for row in rows],
                r_squared=float(first.r_squared or 0.0),
                algorithm=first.algorithm,
                historical_days_used=(first.algorithm_params or {}).get("historical_days_used"),
            )
