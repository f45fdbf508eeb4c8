"""
Base interface for historical order data sources

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from engine.enums import MetricType
from engine.trends import TrendPoint


class OrderHistorySource(ABC):
    """Read-only view over a tenant's orders, aggregated per calendar day.

    Implementations return one point per day that has at least one order,
    ascending by date. Days without orders are left out rather than reported
    as zero.
    """

    @abstractmethod
    def daily_totals(self, tenant_id: str, metric_type: MetricType, since: datetime) -> List[TrendPoint]: ...

    @abstractmethod
    def tenant_ids(self) -> List[str]: ...
