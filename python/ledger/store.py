"""
Ledger Store Interface

Data-access abstraction shared by the SQL-backed store and the fixture
store. Handlers receive one LedgerStore instance, chosen at startup, and
never branch on which implementation they got.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from .models import Bill, BillStatus, BillType, Khata
from .validation import BillCreateInput, KhataCreateInput

BILL_NUMBER_PREFIX = "BILL"


def format_bill_number(khata_id: int, sequence: int) -> str:
    """Build a bill number such as BILL-1-0001.

    Args:
        khata_id: Khata the bill belongs to
        sequence: 1-based position of the bill within the khata

    Returns:
        Bill number string
    """
    return f"{BILL_NUMBER_PREFIX}-{khata_id}-{sequence:04d}"


@dataclass
class BillFilters:
    """Filters for listing bills. None means "not filtered"."""

    khata_id: int | None = None
    party_id: int | None = None
    bill_type: BillType | None = None
    status: BillStatus | None = None
    start_date: date | None = None
    end_date: date | None = None

    def matches(self, bill: Bill) -> bool:
        """Check a bill against the filters in memory."""
        if self.khata_id is not None and bill.khata_id != self.khata_id:
            return False
        if self.party_id is not None and bill.party_id != self.party_id:
            return False
        if self.bill_type is not None and bill.bill_type != self.bill_type.value:
            return False
        if self.status is not None and bill.status != self.status.value:
            return False
        if self.start_date is not None and bill.bill_date < self.start_date:
            return False
        if self.end_date is not None and bill.bill_date > self.end_date:
            return False
        return True


@dataclass
class BillPage:
    """One page of bills plus the unpaged total."""

    bills: list[Bill]
    total: int


class LedgerStore(ABC):
    """Abstract data-access layer for khatas and bills."""

    MODE: str = "unknown"

    @abstractmethod
    def list_bills(self, filters: BillFilters, offset: int, limit: int) -> BillPage:
        """List bills newest first.

        Args:
            filters: Equality and date-range filters
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            BillPage with party and transactions loaded on each bill

        Raises:
            StorageError: If the backing store fails
        """

    @abstractmethod
    def create_bill(self, data: BillCreateInput) -> Bill:
        """Create a PENDING bill with the next bill number for its khata.

        Raises:
            KhataNotFoundError: If the khata does not exist
            PartyNotFoundError: If a party was given and does not exist
            StorageError: If the backing store fails
        """

    @abstractmethod
    def list_khatas(self) -> list[Khata]:
        """List all khatas ordered by name."""

    @abstractmethod
    def create_khata(self, data: KhataCreateInput) -> Khata:
        """Create a khata."""

    def close(self) -> None:
        """Release resources held by the store."""
