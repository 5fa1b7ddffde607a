"""Pytest fixtures for testing"""

import asyncio
import itertools
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient

from sales_gateway.api.main import create_app
from sales_gateway.domain.models import SalesRecord
from sales_gateway.infrastructure.store import RecordStore


class StubSource:
    """In-memory stand-in for the CSV source that counts fetches"""

    description = "stub"

    def __init__(
        self,
        records: Optional[List[SalesRecord]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.records = records or []
        self.error = error
        self.delay = delay
        self.calls = 0

    async def fetch_records(self) -> List[SalesRecord]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def make_record() -> Callable[..., SalesRecord]:
    """Factory for records with sensible defaults; override any field by keyword"""
    counter = itertools.count(1)

    def _make_record(**overrides) -> SalesRecord:
        number = next(counter)
        values = dict(
            transaction_id=f"T{number:04d}",
            date=datetime(2023, 1, number % 28 + 1),
            customer_id=f"C{number:04d}",
            customer_name=f"Customer {number}",
            phone_number=f"90000000{number:02d}",
            gender="Male",
            age=30,
            customer_region="North",
            product_category="Clothing",
            tags="",
            quantity=1,
            price_per_unit=Decimal("100.00"),
            final_amount=Decimal("100.00"),
            payment_method="UPI",
        )
        values.update(overrides)
        return SalesRecord(**values)

    return _make_record


@pytest.fixture
def sample_records(make_record) -> List[SalesRecord]:
    """Small mixed dataset covering every filterable field"""
    return [
        make_record(
            customer_name="Aarav Sharma", phone_number="9876543210", gender="Male", age=34,
            customer_region="North", product_category="Clothing", tags="casual|summer",
            quantity=2, payment_method="UPI", date=datetime(2023, 1, 5),
        ),
        make_record(
            customer_name="Priya Nair", phone_number="9123456780", gender="Female", age=28,
            customer_region="South", product_category="Beauty", tags="skincare|organic",
            quantity=1, payment_method="Credit Card", date=datetime(2023, 1, 7),
        ),
        make_record(
            customer_name="Rohan Gupta", phone_number="9988776655", gender="Male", age=45,
            customer_region="West", product_category="Electronics", tags="gadgets|sale",
            quantity=1, payment_method="Debit Card", date=datetime(2023, 2, 11),
        ),
        make_record(
            customer_name="Ishita Verma", phone_number="9012345678", gender="Female", age=31,
            customer_region="North", product_category="Clothing", tags="festive|sale",
            quantity=3, payment_method="Cash", date=datetime(2023, 2, 14),
        ),
        make_record(
            customer_name="Dev Patel", phone_number="9456123780", gender="Male", age=None,
            customer_region="West", product_category="Electronics", tags="gadgets|clearance",
            quantity=None, payment_method="Credit Card", date=None,
        ),
    ]


@pytest.fixture
def make_store() -> Callable[..., RecordStore]:
    """Build a RecordStore over a StubSource"""

    def _make_store(records=None, error=None, delay=0.0) -> RecordStore:
        return RecordStore(StubSource(records=records, error=error, delay=delay))

    return _make_store


@pytest.fixture
def client(make_store, sample_records) -> TestClient:
    """Create FastAPI test client over the sample dataset"""
    app = create_app(store=make_store(records=sample_records))
    return TestClient(app)
