from datasources.base import OrderHistorySource
from datasources.orders import SqlOrderHistory

__all__ = ["OrderHistorySource", "SqlOrderHistory"]
