"""
Sales forecasting: least-squares trend fitting and forward projection with 95%
confidence bands.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.regression import RegressionModel, fit
from engine.forecast.projector import ForecastPoint, ForecastResult, linear_regression, project

__all__ = ["RegressionModel", "fit", "ForecastPoint", "ForecastResult", "linear_regression", "project"]
