"""
Errors raised by the forecasting engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any


class ForecastError(Exception):
    pass


class InvalidMetric(ForecastError, ValueError):
    def __init__(self, metric_type: Any):
        self.metric_type = metric_type
        super().__init__(
            f"Invalid metric type: {metric_type}. "
            "Valid values: revenue, transactions, average_ticket"
        )


class InsufficientData(ForecastError):
    def __init__(self, found: int, required: int):
        self.found = found
        self.required = required
        super().__init__(
            f"Insufficient historical data. Need at least {required} days "
            f"with sales, found {found}."
        )


class DegenerateRegression(ForecastError):
    pass
