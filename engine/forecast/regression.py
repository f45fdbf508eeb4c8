"""
Ordinary least-squares fit over a daily trend series, using the position of each
present day (1..n) as the independent variable, with goodness of fit and the
residual sum of squares needed for confidence bands.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from engine.exceptions import DegenerateRegression
from engine.trends import TrendPoint

MIN_REGRESSION_POINTS = 2


@dataclass(frozen=True)
class RegressionModel:
    slope: float
    intercept: float
    r_squared: float
    ss_residual: float
    n: int

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    @property
    def standard_error(self) -> float:
        return math.sqrt(self.ss_residual / max(1, self.n - 2))


def _positions(n: int) -> np.ndarray:
    # gap days are not represented, so x counts present days only
    return np.arange(1, n + 1, dtype=float)


def fit(trends: Sequence[TrendPoint]) -> RegressionModel:
    n = len(trends)
    if n < MIN_REGRESSION_POINTS:
        raise DegenerateRegression(
            f"Linear regression needs at least {MIN_REGRESSION_POINTS} points, got {n}"
        )

    x = _positions(n)
    y = np.array([p.value for p in trends], dtype=float)

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n

    predicted = slope * x + intercept
    ss_residual = float(np.sum((y - predicted) ** 2))
    ss_total = float(np.sum((y - sum_y / n) ** 2))

    r_squared = 1.0 - ss_residual / ss_total if ss_total > 0 else 0.0

    return RegressionModel(
        slope=slope,
        intercept=intercept,
        r_squared=max(0.0, min(1.0, r_squared)),
        ss_residual=ss_residual,
        n=n,
    )
