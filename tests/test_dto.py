"""
Tests for Ledger DTO Mapping

Amounts must stay decimal strings and timestamps ISO-8601 strings.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from python.ledger import Bill, BillTransaction, Khata, Party, bill_to_dto, khata_to_dto
from python.ledger.dto import format_amount, format_date, format_timestamp, total_pages


class TestFormatters:
    """Tests for the scalar formatters."""

    @pytest.mark.parametrize("value,expected", [
        (Decimal("25000.00"), "25000"),
        (Decimal("0.00"), "0"),
        (Decimal("12.50"), "12.5"),
        (Decimal("1234.56"), "1234.56"),
        (Decimal("1E+3"), "1000"),
        (0, "0"),
        (None, "0"),
    ])
    def test_format_amount(self, value, expected):
        assert format_amount(value) == expected

    def test_format_timestamp_utc(self):
        value = datetime(2024, 1, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-01T09:30:15.123Z"

    def test_format_timestamp_naive_is_utc(self):
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_format_timestamp_converts_offset(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        value = datetime(2024, 1, 1, 5, 30, tzinfo=ist)
        assert format_timestamp(value) == "2024-01-01T00:00:00.000Z"

    def test_format_date(self):
        assert format_date(date(2024, 2, 29)) == "2024-02-29"
        assert format_date(None) is None

    @pytest.mark.parametrize("total,page_size,expected", [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (25, 7, 4),
    ])
    def test_total_pages(self, total, page_size, expected):
        assert total_pages(total, page_size) == expected


class TestRecordMapping:
    """Tests for bill_to_dto and khata_to_dto."""

    @pytest.fixture
    def bill(self) -> Bill:
        stamp = datetime(2024, 1, 5, 11, 0, tzinfo=timezone.utc)
        return Bill(
            id=7,
            bill_number="BILL-1-0007",
            khata_id=1,
            party_id=2,
            party=Party(id=2, name="Fashion Retailer"),
            bill_date=date(2024, 1, 5),
            due_date=None,
            amount=Decimal("35000.00"),
            paid_amount=Decimal("10000.00"),
            description="Cloth Sale",
            bill_type="SALE",
            status="PARTIAL",
            transactions=[
                BillTransaction(id=3, amount=Decimal("10000.00"), created_at=stamp),
            ],
            created_at=stamp,
            updated_at=stamp,
        )

    def test_bill_dto_json_shape(self, bill):
        payload = bill_to_dto(bill).model_dump(by_alias=True)

        assert payload == {
            "id": 7,
            "billNumber": "BILL-1-0007",
            "khataId": 1,
            "partyId": 2,
            "partyName": "Fashion Retailer",
            "billDate": "2024-01-05",
            "dueDate": None,
            "amount": "35000",
            "paidAmount": "10000",
            "description": "Cloth Sale",
            "billType": "SALE",
            "status": "PARTIAL",
            "transactions": [
                {"id": 3, "amount": "10000", "date": "2024-01-05T11:00:00.000Z"},
            ],
            "createdAt": "2024-01-05T11:00:00.000Z",
            "updatedAt": "2024-01-05T11:00:00.000Z",
        }

    def test_bill_without_party(self, bill):
        bill.party = None
        bill.party_id = None

        dto = bill_to_dto(bill)

        assert dto.party_id is None
        assert dto.party_name is None

    def test_money_never_float(self, bill):
        payload = bill_to_dto(bill).model_dump(by_alias=True)

        assert isinstance(payload["amount"], str)
        assert isinstance(payload["paidAmount"], str)
        assert all(isinstance(t["amount"], str) for t in payload["transactions"])

    def test_khata_dto(self):
        stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
        khata = Khata(id=1, name="Main Account Book", description=None, created_at=stamp, updated_at=stamp)

        assert khata_to_dto(khata).model_dump(by_alias=True) == {
            "id": 1,
            "name": "Main Account Book",
            "description": None,
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        }
