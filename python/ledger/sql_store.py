"""
SQL Ledger Store

LedgerStore backed by SQLAlchemy sessions. Every operation runs in its own
short-lived session.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from .exceptions import KhataNotFoundError, PartyNotFoundError, StorageError
from .models import Bill, BillStatus, Khata, Party
from .store import BillFilters, BillPage, LedgerStore, format_bill_number
from .validation import BillCreateInput, KhataCreateInput

logger = logging.getLogger(__name__)


def bill_conditions(filters: BillFilters) -> list:
    """Translate BillFilters into SQLAlchemy WHERE clauses."""
    conditions = []

    if filters.khata_id is not None:
        conditions.append(Bill.khata_id == filters.khata_id)

    if filters.party_id is not None:
        conditions.append(Bill.party_id == filters.party_id)

    if filters.bill_type is not None:
        conditions.append(Bill.bill_type == filters.bill_type.value)

    if filters.status is not None:
        conditions.append(Bill.status == filters.status.value)

    if filters.start_date is not None:
        conditions.append(Bill.bill_date >= filters.start_date)

    if filters.end_date is not None:
        conditions.append(Bill.bill_date <= filters.end_date)

    return conditions


class SqlLedgerStore(LedgerStore):
    """Ledger store over a relational database."""

    MODE = "database"

    def __init__(self, session_factory: sessionmaker, bill_number_attempts: int = 3):
        """Initialize the store.

        Args:
            session_factory: Factory producing SQLAlchemy sessions
            bill_number_attempts: Insert attempts when a concurrent create
                takes the same bill number
        """
        self.session_factory = session_factory
        self.bill_number_attempts = max(1, bill_number_attempts)

    def list_bills(self, filters: BillFilters, offset: int, limit: int) -> BillPage:
        conditions = bill_conditions(filters)

        query = (
            select(Bill)
            .options(selectinload(Bill.party), selectinload(Bill.transactions))
            .where(*conditions)
            .order_by(Bill.bill_date.desc(), Bill.id.desc())
            .offset(offset)
            .limit(limit)
        )
        count_query = select(func.count(Bill.id)).where(*conditions)

        try:
            with self.session_factory() as session:
                bills = list(session.scalars(query).all())
                total = session.scalar(count_query) or 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to list bills: {e}")
            raise StorageError(str(e)) from e

        return BillPage(bills=bills, total=total)

    def create_bill(self, data: BillCreateInput) -> Bill:
        # Count and insert share a transaction; the unique bill_number
        # constraint catches concurrent creates, which are retried.
        last_error: IntegrityError | None = None

        for attempt in range(1, self.bill_number_attempts + 1):
            try:
                with self.session_factory() as session:
                    with session.begin():
                        bill = self._insert_bill(session, data)
                return bill
            except IntegrityError as e:
                last_error = e
                logger.warning(
                    f"Bill number conflict for khata {data.khata_id} "
                    f"(attempt {attempt}/{self.bill_number_attempts}): {e.orig}"
                )
            except SQLAlchemyError as e:
                logger.error(f"Failed to create bill: {e}")
                raise StorageError(str(e)) from e

        raise StorageError(
            f"Could not allocate a bill number for khata {data.khata_id}: {last_error}"
        )

    def _insert_bill(self, session: Session, data: BillCreateInput) -> Bill:
        khata = session.get(Khata, data.khata_id)
        if khata is None:
            raise KhataNotFoundError(data.khata_id)

        party = None
        if data.party_id is not None:
            party = session.get(Party, data.party_id)
            if party is None:
                raise PartyNotFoundError(data.party_id)

        prior_count = session.scalar(
            select(func.count(Bill.id)).where(Bill.khata_id == data.khata_id)
        ) or 0

        bill = Bill(
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
        )
        session.add(bill)
        session.flush()
        return bill

    def list_khatas(self) -> list[Khata]:
        try:
            with self.session_factory() as session:
                return list(session.scalars(select(Khata).order_by(Khata.name.asc(), Khata.id.asc())).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list khatas: {e}")
            raise StorageError(str(e)) from e

    def create_khata(self, data: KhataCreateInput) -> Khata:
        try:
            with self.session_factory() as session:
                with session.begin():
                    khata = Khata(name=data.name, description=data.description)
                    session.add(khata)
                return khata
        except SQLAlchemyError as e:
            logger.error(f"Failed to create khata: {e}")
            raise StorageError(str(e)) from e
