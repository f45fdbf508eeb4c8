import os
import sys
from datetime import datetime, time, timedelta
from decimal import Decimal

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import database
from db_models import Order


@pytest.fixture(autouse=True)
def sqlite_db():
    """Give every test its own empty in-memory database with all tables created."""
    database.dispose_database()
    database.init_database("sqlite://")
    database.init_db()

    yield

    database.dispose_database()


@pytest.fixture
def seed_orders():
    """Insert orders for a tenant; ``days`` maps a date to the list of order totals."""

    def _seed(tenant_id, days):
        with database.get_db_session() as db:
            for day, totals in days.items():
                for i, total in enumerate(totals):
                    db.add(Order(
                        tenant_id=tenant_id,
                        total=Decimal(str(total)),
                        created_at=datetime.combine(day, time(9, 0)) + timedelta(minutes=i),
                    ))

    return _seed
