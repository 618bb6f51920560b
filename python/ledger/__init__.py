"""
Ledger Module

Khata (account book) and bill records for the fabrics ledger: ORM models,
request validation, DTO mapping and the data-access stores.
"""

from .dto import BillDTO, KhataDTO, Pagination, TransactionSummary, bill_to_dto, khata_to_dto
from .exceptions import (
    KhataNotFoundError,
    LedgerError,
    LedgerValidationError,
    NotFoundError,
    PartyNotFoundError,
    StorageError,
)
from .fixtures import FixtureLedgerStore, default_khata
from .models import Base, Bill, BillStatus, BillTransaction, BillType, Khata, Party
from .sql_store import SqlLedgerStore
from .store import BillFilters, BillPage, LedgerStore, format_bill_number
from .validation import BillCreateInput, KhataCreateInput

__all__ = [
    # Models
    "Base",
    "Bill",
    "BillStatus",
    "BillTransaction",
    "BillType",
    "Khata",
    "Party",
    # Validation
    "BillCreateInput",
    "KhataCreateInput",
    # DTOs
    "BillDTO",
    "KhataDTO",
    "Pagination",
    "TransactionSummary",
    "bill_to_dto",
    "khata_to_dto",
    # Stores
    "BillFilters",
    "BillPage",
    "LedgerStore",
    "SqlLedgerStore",
    "FixtureLedgerStore",
    "default_khata",
    "format_bill_number",
    # Errors
    "LedgerError",
    "LedgerValidationError",
    "NotFoundError",
    "KhataNotFoundError",
    "PartyNotFoundError",
    "StorageError",
]
