"""
Ledger ORM Models

SQLAlchemy declarative models for khatas (account books), parties, bills
and the payment transactions recorded against bills.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class BillType(str, Enum):
    """Direction of a bill."""
    PURCHASE = "PURCHASE"
    SALE = "SALE"


class BillStatus(str, Enum):
    """Payment status of a bill."""
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Khata(Base):
    __tablename__ = "khatas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    bills: Mapped[list["Bill"]] = relationship(back_populates="khata")

    def __repr__(self) -> str:
        return f"<Khata id={self.id} name={self.name!r}>"


class Party(Base):
    __tablename__ = "parties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    bills: Mapped[list["Bill"]] = relationship(back_populates="party")


class Bill(Base):
    __tablename__ = "bills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    bill_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    khata_id: Mapped[int] = mapped_column(ForeignKey("khatas.id"), index=True, nullable=False)
    party_id: Mapped[int | None] = mapped_column(ForeignKey("parties.id"), index=True, nullable=True)
    bill_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    bill_type: Mapped[str] = mapped_column(String(16), nullable=False)  # PURCHASE|SALE
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=BillStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    khata: Mapped[Khata] = relationship(back_populates="bills")
    party: Mapped[Party | None] = relationship(back_populates="bills")
    transactions: Mapped[list["BillTransaction"]] = relationship(
        back_populates="bill",
        order_by="BillTransaction.created_at",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_bills_amount_positive"),
        CheckConstraint("paid_amount >= 0", name="ck_bills_paid_nonneg"),
    )

    def __repr__(self) -> str:
        return f"<Bill id={self.id} number={self.bill_number} khata={self.khata_id} amount={self.amount}>"


class BillTransaction(Base):
    __tablename__ = "bill_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    bill_id: Mapped[int] = mapped_column(ForeignKey("bills.id", ondelete="CASCADE"), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    bill: Mapped[Bill] = relationship(back_populates="transactions")
