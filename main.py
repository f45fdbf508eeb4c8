#!/usr/bin/env python3

"""
Command-line entry point for the Salescast forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from config import LOG_FORMAT, settings
from database import init_database, init_db, dispose_database
from engine.enums import MetricType
from engine.exceptions import InsufficientData, InvalidMetric
from schemas.requests import DailyRunRequest, ForecastRequest, StoredForecastQuery
from schemas.responses import DailyRunResponse, ForecastResponse
from services.daily_forecast import run_daily_forecasts
from services.forecast_service import ForecastService

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_INSUFFICIENT_DATA = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salescast", description="Per-tenant sales forecasting")
    parser.add_argument("--database-url", default=None, help="overrides SALESCAST_DATABASE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create the forecast and order tables")

    gen = sub.add_parser("generate", help="fit and project a forecast for one tenant/metric")
    gen.add_argument("tenant_id")
    gen.add_argument("metric_type", help="revenue | transactions | average_ticket")
    gen.add_argument("--days-ahead", type=int, default=settings.forecast_default_days_ahead)
    gen.add_argument("--historical-days", type=int, default=settings.forecast_default_historical_days)
    gen.add_argument("--persist", action="store_true", help="store the result as today's forecast")

    show = sub.add_parser("show", help="print today's stored forecast for one tenant/metric")
    show.add_argument("tenant_id")
    show.add_argument("metric_type")
    show.add_argument("--days-ahead", type=int, default=settings.forecast_default_days_ahead)

    nightly = sub.add_parser("nightly", help="generate and store forecasts for every tenant")
    nightly.add_argument("--tenant", action="append", dest="tenant_ids", default=None)
    nightly.add_argument("--metric", action="append", dest="metrics", default=None)
    nightly.add_argument("--days-ahead", type=int, default=settings.forecast_default_days_ahead)
    return parser


def _generate(service: ForecastService, args: argparse.Namespace) -> int:
    req = ForecastRequest(
        tenant_id=args.tenant_id,
        metric_type=MetricType.parse(args.metric_type),
        days_ahead=args.days_ahead,
        historical_days=args.historical_days,
        persist=args.persist,
    )
    result = service.generate_forecast(req.tenant_id, req.metric_type, req.days_ahead, req.historical_days)
    stored = service.persist_forecast(req.tenant_id, req.metric_type, result) if req.persist else None
    print(ForecastResponse.from_result(result, stored=stored).model_dump_json(indent=2))
    return EXIT_OK


def _show(service: ForecastService, args: argparse.Namespace) -> int:
    query = StoredForecastQuery(
        tenant_id=args.tenant_id,
        metric_type=MetricType.parse(args.metric_type),
        days_ahead=args.days_ahead,
    )
    result = service.get_forecast(query.tenant_id, query.metric_type, query.days_ahead)
    if result is None:
        print(
            f"No {query.metric_type.value} forecast stored today for tenant {query.tenant_id}; "
            "run `generate --persist` or `nightly` first.",
            file=sys.stderr,
        )
        return EXIT_NOT_FOUND
    print(ForecastResponse.from_result(result).model_dump_json(indent=2))
    return EXIT_OK


def _nightly(service: ForecastService, args: argparse.Namespace) -> int:
    req = DailyRunRequest(
        tenant_ids=args.tenant_ids,
        metrics=[MetricType.parse(m) for m in args.metrics] if args.metrics else None,
        days_ahead=args.days_ahead,
    )
    summary = run_daily_forecasts(
        service,
        tenant_ids=req.tenant_ids,
        metrics=[m.value for m in req.metrics] if req.metrics else None,
        days_ahead=req.days_ahead,
    )
    print(DailyRunResponse.from_summary(summary).model_dump_json(indent=2))
    return EXIT_OK


_COMMANDS = {
    "generate": _generate,
    "show": _show,
    "nightly": _nightly,
}


def main(argv: Optional[List[str]] = None, service: Optional[ForecastService] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    args = _build_parser().parse_args(argv)

    init_database(args.database_url or settings.database_url)
    if args.command == "init-db":
        init_db()
        log.info("Tables created")
        return EXIT_OK

    try:
        return _COMMANDS[args.command](service or ForecastService(), args)
    except InvalidMetric as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except InsufficientData as exc:
        print(
            f"error: {exc} Forecasts become available once the tenant has "
            f"{exc.required} days of sales in the lookback window.",
            file=sys.stderr,
        )
        return EXIT_INSUFFICIENT_DATA
    except (ValidationError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    try:
        sys.exit(main())
    finally:
        dispose_database()
