"""
Fixture Ledger Store

Serves hardcoded sample khatas and bills when no database is configured, so
the dashboard stays usable without a backend. Records are rebuilt on every
call and creates are never persisted, which keeps every response
deterministic.
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from .exceptions import KhataNotFoundError, PartyNotFoundError
from .models import Bill, BillStatus, BillTransaction, BillType, Khata, Party
from .store import BillFilters, BillPage, LedgerStore, format_bill_number
from .validation import BillCreateInput, KhataCreateInput

logger = logging.getLogger(__name__)

FIXTURE_TIMESTAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)

DEFAULT_KHATA_ID = 1
DEFAULT_KHATA_NAME = "Main Account Book"
DEFAULT_KHATA_DESCRIPTION = "Primary business khata"


def default_khata() -> Khata:
    """The synthetic khata returned when no real khata can be listed."""
    return Khata(
        id=DEFAULT_KHATA_ID,
        name=DEFAULT_KHATA_NAME,
        description=DEFAULT_KHATA_DESCRIPTION,
        created_at=FIXTURE_TIMESTAMP,
        updated_at=FIXTURE_TIMESTAMP,
    )


def sample_parties() -> dict[int, Party]:
    return {
        1: Party(id=1, name="Textile Suppliers Ltd", created_at=FIXTURE_TIMESTAMP),
        2: Party(id=2, name="Fashion Retailer", created_at=FIXTURE_TIMESTAMP),
    }


def sample_bills() -> list[Bill]:
    """Sample bills: an unpaid thread purchase and a partly paid cloth sale."""
    parties = sample_parties()

    return [
        Bill(
            id=1,
            bill_number=format_bill_number(DEFAULT_KHATA_ID, 1),
            khata_id=DEFAULT_KHATA_ID,
            party_id=1,
            party=parties[1],
            bill_date=date(2024, 1, 10),
            due_date=date(2024, 2, 9),
            amount=Decimal("25000.00"),
            paid_amount=Decimal("0.00"),
            description="Thread Purchase",
            bill_type=BillType.PURCHASE.value,
            status=BillStatus.PENDING.value,
            transactions=[],
            created_at=datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc),
        ),
        Bill(
            id=2,
            bill_number=format_bill_number(DEFAULT_KHATA_ID, 2),
            khata_id=DEFAULT_KHATA_ID,
            party_id=2,
            party=parties[2],
            bill_date=date(2024, 1, 5),
            due_date=date(2024, 1, 20),
            amount=Decimal("35000.00"),
            paid_amount=Decimal("10000.00"),
            description="Cloth Sale",
            bill_type=BillType.SALE.value,
            status=BillStatus.PARTIAL.value,
            transactions=[
                BillTransaction(
                    id=1,
                    bill_id=2,
                    amount=Decimal("10000.00"),
                    created_at=datetime(2024, 1, 8, 14, 0, tzinfo=timezone.utc),
                ),
            ],
            created_at=datetime(2024, 1, 5, 11, 0, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 8, 14, 0, tzinfo=timezone.utc),
        ),
    ]


class FixtureLedgerStore(LedgerStore):
    """In-memory, read-only ledger store over the sample records."""

    MODE = "fixture"

    def list_bills(self, filters: BillFilters, offset: int, limit: int) -> BillPage:
        bills = [b for b in sample_bills() if filters.matches(b)]
        bills.sort(key=lambda b: (b.bill_date, b.id), reverse=True)
        return BillPage(bills=bills[offset:offset + limit], total=len(bills))

    def create_bill(self, data: BillCreateInput) -> Bill:
        if data.khata_id != DEFAULT_KHATA_ID:
            raise KhataNotFoundError(data.khata_id)

        party = None
        if data.party_id is not None:
            party = sample_parties().get(data.party_id)
            if party is None:
                raise PartyNotFoundError(data.party_id)

        existing = sample_bills()
        prior_count = sum(1 for b in existing if b.khata_id == data.khata_id)

        logger.info(f"Fixture mode: bill for khata {data.khata_id} not persisted")

        return Bill(
            id=len(existing) + 1,
            bill_number=format_bill_number(data.khata_id, prior_count + 1),
            khata_id=data.khata_id,
            party_id=data.party_id,
            party=party,
            bill_date=data.bill_date,
            due_date=data.due_date,
            amount=data.amount,
            paid_amount=Decimal("0"),
            description=data.description,
            bill_type=data.bill_type.value,
            status=BillStatus.PENDING.value,
            transactions=[],
            created_at=FIXTURE_TIMESTAMP,
            updated_at=FIXTURE_TIMESTAMP,
        )

    def list_khatas(self) -> list[Khata]:
        return [default_khata()]

    def create_khata(self, data: KhataCreateInput) -> Khata:
        logger.info(f"Fixture mode: khata {data.name!r} not persisted")
        return Khata(
            id=DEFAULT_KHATA_ID + 1,
            name=data.name,
            description=data.description,
            created_at=FIXTURE_TIMESTAMP,
            updated_at=FIXTURE_TIMESTAMP,
        )
