"""
Pytest configuration and fixtures for the fabric ledger tests.
"""

import os
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest

# Settings are read at import time, so the environment is fixed before the app loads
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LEDGER_DATA_MODE", "fixture")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from python.api.database import get_store, make_session_factory
from python.api.main import app
from python.ledger import Base, Bill, BillStatus, BillType, FixtureLedgerStore, Khata, LedgerStore, Party, SqlLedgerStore

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the ledger tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return make_session_factory(engine)


@pytest.fixture
def sql_store(session_factory: sessionmaker) -> SqlLedgerStore:
    return SqlLedgerStore(session_factory)


@pytest.fixture
def fixture_store() -> FixtureLedgerStore:
    return FixtureLedgerStore()


@pytest.fixture
def seed(session_factory: sessionmaker):
    """Return a helper that inserts records and returns them detached."""

    def _seed(*records):
        with session_factory() as session:
            with session.begin():
                session.add_all(records)
        return records

    return _seed


@pytest.fixture
def main_khata(seed) -> Khata:
    """Khata 1 with no bills."""
    (khata,) = seed(Khata(id=1, name="Main Account Book", description="Primary business khata"))
    return khata


@pytest.fixture
def supplier(seed) -> Party:
    (party,) = seed(Party(id=1, name="Textile Suppliers Ltd"))
    return party


def make_bill(
    khata_id: int,
    sequence: int,
    bill_date: date,
    amount: str = "1000.00",
    bill_type: BillType = BillType.PURCHASE,
    status: BillStatus = BillStatus.PENDING,
    party_id: int | None = None,
) -> Bill:
    """Build an unsaved bill with a conventional bill number."""
    return Bill(
        bill_number=f"BILL-{khata_id}-{sequence:04d}",
        khata_id=khata_id,
        party_id=party_id,
        bill_date=bill_date,
        amount=Decimal(amount),
        paid_amount=Decimal("0"),
        bill_type=bill_type.value,
        status=status.value,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_client():
    """Return a factory for TestClients wired to a given store."""

    def _make_client(store: LedgerStore, headers: dict | None = None) -> TestClient:
        app.dependency_overrides[get_store] = lambda: store
        return TestClient(app, headers=headers)

    yield _make_client
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, sql_store: SqlLedgerStore) -> TestClient:
    """TestClient backed by the SQLite ledger store."""
    return make_client(sql_store)


@pytest.fixture
def fixture_client(make_client, fixture_store: FixtureLedgerStore) -> TestClient:
    """TestClient backed by the fixture ledger store."""
    return make_client(fixture_store)


@pytest.fixture
def sample_bill_body() -> dict:
    """Return a valid bill creation body."""
    return {
        "khataId": 1,
        "billType": "PURCHASE",
        "amount": "25000",
        "billDate": "2024-01-01",
    }


@pytest.fixture
def bill_factory():
    """Return make_bill for building unsaved bills."""
    return make_bill
