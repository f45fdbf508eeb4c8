"""
ORM tables read and written by the forecasting engine.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import JSON, Date, DateTime, Index, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Order(Base):
    """Point-of-sale order. Owned by the POS application; only read here."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(String(128), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_orders_tenant_created", "tenant_id", "created_at"),
    )


class AnalyticsForecast(Base):
    __tablename__ = "analytics_forecasts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id: Mapped[str] = mapped_column(String(128), nullable=False)
    forecast_date: Mapped[date] = mapped_column(Date, nullable=False)
    predicted_date: Mapped[date] = mapped_column(Date, nullable=False)
    metric_type: Mapped[str] = mapped_column(String(32), nullable=False)
    algorithm: Mapped[str] = mapped_column(String(32), nullable=False)
    predicted_value: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    confidence_lower: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)
    confidence_upper: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)
    r_squared: Mapped[float | None] = mapped_column(Numeric(6, 4, asdecimal=False), nullable=True)
    algorithm_params: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "forecast_date", "predicted_date", "metric_type", "algorithm",
            name="uq_analytics_forecasts_cohort_day",
        ),
        Index("ix_analytics_forecasts_lookup", "tenant_id", "metric_type", "forecast_date", "predicted_date"),
    )
