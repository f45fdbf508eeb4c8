"""
Enumerations for forecast metrics and algorithms

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from engine.exceptions import InvalidMetric


class MetricType(str, Enum):
    revenue = "revenue"
    transactions = "transactions"
    average_ticket = "average_ticket"

    @classmethod
    def parse(cls, value: str | MetricType) -> MetricType:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise InvalidMetric(value) from None


class Algorithm(str, Enum):
    linear_regression = "linear_regression"
