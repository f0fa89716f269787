"""
Pytest configuration and shared fixtures.

Puts src/ on sys.path so the tests run from a plain checkout as well as from an
editable install, and provides a fixed clock plus customer/order factories.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


def _ensure_src_on_sys_path() -> None:
    """Add src/ to sys.path if missing."""
    src_root = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_src_on_sys_path()

os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Saturday noon UTC; default orders fall on the Monday before, at dinner time.
NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
MONDAY = datetime(2026, 3, 9, 19, 0)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def make_order():
    """Factory for CustomerOrder records."""
    from customer_tagging.models.customer import CustomerOrder, OrderItem

    counter = {"n": 0}

    def _make(timestamp=MONDAY, categories=("Mains",), combo=False, total=300.0):
        counter["n"] += 1
        n = counter["n"]
        return CustomerOrder(
            id=f"order-{n}",
            timestamp=timestamp,
            items=[
                OrderItem(
                    id=f"item-{n}",
                    name="Thali" if combo else "Paneer Tikka",
                    category=next(iter(categories), "Mains"),
                    price=total,
                    quantity=1,
                    is_combo=combo,
                )
            ],
            categories=set(categories),
            total_amount=total,
        )

    return _make


@pytest.fixture
def make_customer():
    """Factory for Customer records with sensible defaults relative to NOW."""
    from customer_tagging.models.customer import Customer

    def _make(customer_id="cust-1", **overrides):
        first_days = overrides.pop("first_visit_days_ago", 200)
        last_days = overrides.pop("last_visit_days_ago", 5)
        data = {
            "id": customer_id,
            "name": "Priya Sharma",
            "phone": "+91 98765 43210",
            "restaurant_id": "rest-1",
            "first_visit_date": NOW - timedelta(days=first_days),
            "last_visit_date": NOW - timedelta(days=last_days),
            "total_visits": 5,
            "total_spend": 1500.0,
            "average_order_value": 300.0,
            "average_visit_gap": 10.0,
            "guest_estimate_avg": 2.0,
        }
        data.update(overrides)
        return Customer(**data)

    return _make
