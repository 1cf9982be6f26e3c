# app/models/transaction.py
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Numeric, DateTime, Enum, Uuid
from app.core.database import Base


class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"


class TransactionCategory(str, enum.Enum):
    food = "Food"
    travel = "Travel"
    bills = "Bills"
    shopping = "Shopping"
    entertainment = "Entertainment"
    healthcare = "Healthcare"
    salary = "Salary"
    freelance = "Freelance"
    investment = "Investment"
    other = "Other"


def utcnow() -> datetime:
    """Naive UTC timestamp; every datetime column stores UTC without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column("user_id", String(length=64), nullable=False, index=True)
    type = Column(
        Enum(TransactionType, name="transaction_type", native_enum=False,
             values_callable=_enum_values, length=16),
        nullable=False,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(
        Enum(TransactionCategory, name="transaction_category", native_enum=False,
             values_callable=_enum_values, length=32),
        nullable=False,
    )
    description = Column(String(length=100), nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Transaction {self.type.value if self.type else None} amount={self.amount} date={self.date} owner_id={self.owner_id}>"
