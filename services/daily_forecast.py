"""
Daily forecast run: regenerates and stores forecasts for every tenant and metric.

A failure for one tenant/metric pair is logged and counted; it never stops the
remaining pairs from being processed.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from config import settings
from engine.exceptions import InsufficientData
from services.forecast_service import ForecastService

log = logging.getLogger(__name__)


@dataclass
class DailyRunSummary:
    tenants_processed: int = 0
    tenants_failed: int = 0
    forecasts_stored: int = 0
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    failures: List[Tuple[str, str, str]] = field(default_factory=list)
    elapsed_seconds: float = 0.0


def run_daily_forecasts(
    service: ForecastService,
    tenant_ids: Optional[Iterable[str]] = None,
    metrics: Optional[Iterable[str]] = None,
    days_ahead: int | None = None,
) -> DailyRunSummary:
    if days_ahead is None:
        days_ahead = settings.forecast_default_days_ahead
    metric_list = list(metrics or settings.daily_forecast_metrics)

    started = time.monotonic()
    summary = DailyRunSummary()
    log.info("Daily forecast run starting")

    tenants = list(tenant_ids) if tenant_ids is not None else service.source.tenant_ids()
    for tenant_id in tenants:
        summary.tenants_processed += 1
        tenant_failed = False
        for metric in metric_list:
            try:
                result = service.generate_forecast(tenant_id, metric, days_ahead=days_ahead)
                stored = service.persist_forecast(tenant_id, metric, result)
                summary.forecasts_stored += stored
            except InsufficientData as exc:
                # tenants with under a week of sales are skipped, not failed
                summary.skipped.append((tenant_id, metric))
                log.warning("Skipping %s forecast for tenant %s: %s", metric, tenant_id, exc)
            except Exception as exc:
                tenant_failed = True
                summary.failures.append((tenant_id, metric, str(exc)))
                log.error("Failed to generate %s forecast for tenant %s", metric, tenant_id, exc_info=True)
        if tenant_failed:
            summary.tenants_failed += 1

    summary.elapsed_seconds = round(time.monotonic() - started, 2)
    log.info(
        "Daily forecast run completed: tenants=%d failed=%d forecasts=%d skipped=%d elapsed=%.2fs",
        summary.tenants_processed,
        summary.tenants_failed,
        summary.forecasts_stored,
        len(summary.skipped),
        summary.elapsed_seconds,
    )
    return summary
