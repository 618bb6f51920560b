"""
Ledger DTOs

JSON shapes returned across the HTTP boundary and the mapping from ORM
records into them. Money is always carried as a decimal string, timestamps
as ISO-8601 UTC strings.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import Bill, BillTransaction, Khata


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionSummary(CamelModel):
    """Payment recorded against a bill."""

    id: int
    amount: str
    date: str


class BillDTO(CamelModel):
    """Bill as returned by the API."""

    id: int
    bill_number: str
    khata_id: int
    party_id: int | None = None
    party_name: str | None = None
    bill_date: str
    due_date: str | None = None
    amount: str
    paid_amount: str
    description: str | None = None
    bill_type: str
    status: str
    transactions: list[TransactionSummary] = []
    created_at: str
    updated_at: str


class KhataDTO(CamelModel):
    """Khata (account book) as returned by the API."""

    id: int
    name: str
    description: str | None = None
    created_at: str
    updated_at: str


class Pagination(CamelModel):
    total: int
    page: int
    page_size: int
    total_pages: int


def format_amount(value: Decimal | int | None) -> str:
    """Format money as a plain decimal string.

    Trailing zeros are dropped and exponent notation is never used, so
    Decimal("25000.00") becomes "25000" and Decimal("12.50") becomes "12.5".
    """
    if value is None:
        value = Decimal("0")
    normalized = Decimal(value).normalize()
    text = format(normalized, "f")
    return "0" if text in ("-0", "") else text


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def format_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed for total rows (ceiling division)."""
    return (total + page_size - 1) // page_size


def transaction_to_dto(transaction: BillTransaction) -> TransactionSummary:
    return TransactionSummary(
        id=transaction.id,
        amount=format_amount(transaction.amount),
        date=format_timestamp(transaction.created_at),
    )


def bill_to_dto(bill: Bill) -> BillDTO:
    """Map a Bill record, with its party and transactions loaded, to a BillDTO."""
    return BillDTO(
        id=bill.id,
        bill_number=bill.bill_number,
        khata_id=bill.khata_id,
        party_id=bill.party_id,
        party_name=bill.party.name if bill.party is not None else None,
        bill_date=format_date(bill.bill_date),
        due_date=format_date(bill.due_date),
        amount=format_amount(bill.amount),
        paid_amount=format_amount(bill.paid_amount),
        description=bill.description,
        bill_type=bill.bill_type,
        status=bill.status,
        transactions=[transaction_to_dto(t) for t in bill.transactions or []],
        created_at=format_timestamp(bill.created_at),
        updated_at=format_timestamp(bill.updated_at),
    )


def khata_to_dto(khata: Khata) -> KhataDTO:
    return KhataDTO(
        id=khata.id,
        name=khata.name,
        description=khata.description,
        created_at=format_timestamp(khata.created_at),
        updated_at=format_timestamp(khata.updated_at),
    )
