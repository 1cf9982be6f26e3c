# app/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import asc, desc, func
from app.models.transaction import Transaction, TransactionCategory, TransactionType
from app.schemas.transaction import SortField, SortOrder, TransactionCreate, TransactionUpdate
from app.utils.query import FetchSpec
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
import uuid

_SORT_COLUMNS = {
    SortField.date: Transaction.date,
    SortField.amount: Transaction.amount,
}


def _conditions(owner_id: str, spec: FetchSpec) -> list:
    conditions = [Transaction.owner_id == owner_id]
    if spec.category is not None:
        conditions.append(Transaction.category == spec.category)
    if spec.type is not None:
        conditions.append(Transaction.type == spec.type)
    if spec.date_range is not None:
        start, end = spec.date_range
        conditions.append(Transaction.date >= start)
        conditions.append(Transaction.date <= end)
    return conditions


def _ordering(spec: FetchSpec) -> list:
    direction = asc if spec.sort_order == SortOrder.asc else desc
    # id breaks ties so pages never overlap
    return [direction(_SORT_COLUMNS[spec.sort_by]), direction(Transaction.id)]


async def count_transactions(owner_id: str, spec: FetchSpec, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Transaction).where(*_conditions(owner_id, spec))
    )
    return result.scalar_one()


async def find_transactions(owner_id: str, spec: FetchSpec, db: AsyncSession) -> List[Transaction]:
    query = select(Transaction).where(*_conditions(owner_id, spec)).order_by(*_ordering(spec))
    if spec.limit is not None:
        query = query.offset(spec.offset).limit(spec.limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_transactions(owner_id: str, spec: FetchSpec, db: AsyncSession) -> Tuple[List[Transaction], int]:
    """One page of matching transactions plus the total number of matches."""
    total = await count_transactions(owner_id, spec, db)
    transactions = await find_transactions(owner_id, spec, db)
    return transactions, total


async def get_transactions_for_user(owner_id: str, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.owner_id == owner_id).order_by(Transaction.date)
    )
    return list(result.scalars().all())


async def get_transaction_by_id(transaction_id: uuid.UUID, owner_id: str, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.owner_id == owner_id)
    )
    return result.scalar_one_or_none()


async def create_transaction_for_user(owner_id: str, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    new_tx = Transaction(**tx_in.model_dump(), owner_id=owner_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx


async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    for field, value in tx_in.model_dump(exclude_unset=True).items():
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx


async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()


async def bulk_create_transactions_for_user(
    owner_id: str,
    tx_inputs: Iterable[TransactionCreate],
    db: AsyncSession,
) -> List[Transaction]:
    """Inserts many transactions for an owner in a single commit."""
    new_instances: List[Transaction] = [
        Transaction(**tx_in.model_dump(), owner_id=owner_id) for tx_in in tx_inputs
    ]
    if not new_instances:
        return []
    db.add_all(new_instances)
    await db.commit()
    # refresh individually to return with store-assigned fields
    for inst in new_instances:
        await db.refresh(inst)
    return new_instances


# Sample data for a fresh install; all dated October 2024
SAMPLE_TRANSACTIONS: List[dict] = [
    {"type": TransactionType.income, "amount": "5000", "category": TransactionCategory.salary,
     "description": "Monthly salary", "date": datetime(2024, 10, 1)},
    {"type": TransactionType.expense, "amount": "150", "category": TransactionCategory.food,
     "description": "Groceries", "date": datetime(2024, 10, 5)},
    {"type": TransactionType.expense, "amount": "50", "category": TransactionCategory.entertainment,
     "description": "Movie tickets", "date": datetime(2024, 10, 10)},
    {"type": TransactionType.expense, "amount": "1200", "category": TransactionCategory.bills,
     "description": "Rent payment", "date": datetime(2024, 10, 1)},
    {"type": TransactionType.income, "amount": "500", "category": TransactionCategory.freelance,
     "description": "Web design project", "date": datetime(2024, 10, 15)},
    {"type": TransactionType.expense, "amount": "80", "category": TransactionCategory.travel,
     "description": "Gas", "date": datetime(2024, 10, 12)},
    {"type": TransactionType.expense, "amount": "200", "category": TransactionCategory.shopping,
     "description": "Clothes", "date": datetime(2024, 10, 20)},
    {"type": TransactionType.expense, "amount": "100", "category": TransactionCategory.healthcare,
     "description": "Doctor visit", "date": datetime(2024, 10, 18)},
]


async def seed_sample_transactions(owner_id: str, db: AsyncSession) -> List[Transaction]:
    """Insert the sample transactions if the owner has none yet.

    Returns the created transactions (empty if the owner already had data).
    """
    result = await db.execute(
        select(func.count()).select_from(Transaction).where(Transaction.owner_id == owner_id)
    )
    if result.scalar_one() > 0:
        return []

    samples = [
        TransactionCreate(**{**sample, "amount": Decimal(sample["amount"])})
        for sample in SAMPLE_TRANSACTIONS
    ]
    return await bulk_create_transactions_for_user(owner_id, samples, db)
