"""
Ledger Input Validation

Request body models for bill and khata creation. Validation is fail-fast:
fields are checked in declaration order and the first failing field raises
LedgerValidationError, so no further fields are checked.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from pydantic import Field, TypeAdapter, ValidationError, field_validator

from .dto import CamelModel
from .exceptions import LedgerValidationError
from .models import BillType

CENTS = Decimal("0.01")

# Largest value a Numeric(14, 2) column holds
MAX_AMOUNT = Decimal("999999999999.99")

# Integer primary keys
MAX_ID = 2**31 - 1

AMOUNT_MESSAGE = "Valid amount is required"

_timestamp = TypeAdapter(datetime)


def _is_blank(value: Any) -> bool:
    # Mirrors JavaScript falsiness for the values a JSON body can carry
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (int, float)) and value == 0:
        return True
    return False


def _positive_id(value: Any, handler, message: str) -> int:
    if isinstance(value, bool):
        raise LedgerValidationError(message)
    try:
        parsed = handler(value)
    except ValidationError:
        raise LedgerValidationError(message) from None
    if not 0 < parsed <= MAX_ID:
        raise LedgerValidationError(message)
    return parsed


def _calendar_date(value: Any, handler, message: str) -> date:
    try:
        return handler(value)
    except ValidationError:
        pass
    # Full timestamps are accepted and reduced to their calendar date
    if isinstance(value, str):
        try:
            return _timestamp.validate_python(value.strip()).date()
        except ValidationError:
            pass
    raise LedgerValidationError(message)


def _optional_text(value: Any, message: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise LedgerValidationError(message)
    return value.strip() or None


class BillCreateInput(CamelModel):
    """Input model for creating a bill."""

    khata_id: int | None = Field(None, validate_default=True)
    bill_type: BillType | None = Field(None, validate_default=True)
    amount: Decimal | None = Field(None, validate_default=True)
    bill_date: date | None = Field(None, validate_default=True)
    party_id: int | None = None
    due_date: date | None = None
    description: str | None = None

    @field_validator("khata_id", mode="wrap")
    @classmethod
    def check_khata_id(cls, value, handler):
        if _is_blank(value):
            raise LedgerValidationError("Khata ID is required")
        return _positive_id(value, handler, "Khata ID must be a positive integer")

    @field_validator("bill_type", mode="wrap")
    @classmethod
    def check_bill_type(cls, value, handler):
        if _is_blank(value):
            raise LedgerValidationError("Bill type is required")
        if isinstance(value, str):
            value = value.strip().upper()
        try:
            return handler(value)
        except ValidationError:
            choices = ", ".join(t.value for t in BillType)
            raise LedgerValidationError(f"Bill type must be one of {choices}") from None

    @field_validator("amount", mode="wrap")
    @classmethod
    def check_amount(cls, value, handler):
        """Round to cents; the result must fit the amount column."""
        if _is_blank(value) or isinstance(value, bool):
            raise LedgerValidationError(AMOUNT_MESSAGE)
        try:
            amount = handler(value)
            if not amount.is_finite():
                raise LedgerValidationError(AMOUNT_MESSAGE)
            amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        except (ValidationError, InvalidOperation):
            raise LedgerValidationError(AMOUNT_MESSAGE) from None
        if not 0 < amount <= MAX_AMOUNT:
            raise LedgerValidationError(AMOUNT_MESSAGE)
        return amount

    @field_validator("bill_date", mode="wrap")
    @classmethod
    def check_bill_date(cls, value, handler):
        if _is_blank(value):
            raise LedgerValidationError("Bill date is required")
        return _calendar_date(value, handler, "Bill date must be an ISO-8601 date")

    @field_validator("party_id", mode="wrap")
    @classmethod
    def check_party_id(cls, value, handler):
        if _is_blank(value):
            return None
        return _positive_id(value, handler, "Party ID must be a positive integer")

    @field_validator("due_date", mode="wrap")
    @classmethod
    def check_due_date(cls, value, handler):
        if _is_blank(value):
            return None
        return _calendar_date(value, handler, "Due date must be an ISO-8601 date")

    @field_validator("description", mode="wrap")
    @classmethod
    def check_description(cls, value, handler):
        return _optional_text(value, "Description must be a string")


class KhataCreateInput(CamelModel):
    """Input model for creating a khata."""

    name: str | None = Field(None, validate_default=True)
    description: str | None = None

    @field_validator("name", mode="wrap")
    @classmethod
    def check_name(cls, value, handler):
        if not isinstance(value, str) or not value.strip():
            raise LedgerValidationError("Khata name is required")
        return value.strip()

    @field_validator("description", mode="wrap")
    @classmethod
    def check_description(cls, value, handler):
        return _optional_text(value, "Description must be a string")
