# app/utils/stats.py
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Tuple

from app.models.transaction import TransactionCategory, TransactionType

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Labels stay English whatever LC_TIME the process runs under
MONTH_ABBR = ("", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_CATEGORY_ORDER = {category: index for index, category in enumerate(TransactionCategory)}
_TYPE_ORDER = {TransactionType.income: 0, TransactionType.expense: 1}


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    category: TransactionCategory
    type: TransactionType
    amount: Decimal


@dataclass(frozen=True)
class MonthlyTotal:
    key: str    # "2024-10"
    month: str  # "Oct 2024"
    income: Decimal
    expense: Decimal
    balance: Decimal


def _amount(tx) -> Decimal:
    # str() keeps float inputs from dragging binary noise into the sum
    return tx.amount if isinstance(tx.amount, Decimal) else Decimal(str(tx.amount))


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _kind(tx) -> TransactionType:
    return TransactionType(tx.type)


# ────────────────────────────────────────────────────────────────────────────────
# SUMMARY
# ────────────────────────────────────────────────────────────────────────────────
def summarize(transactions: Iterable) -> Summary:
    income = ZERO
    expense = ZERO
    for tx in transactions:
        if _kind(tx) == TransactionType.income:
            income += _amount(tx)
        else:
            expense += _amount(tx)
    income, expense = _cents(income), _cents(expense)
    return Summary(total_income=income, total_expense=expense, balance=income - expense)


# ────────────────────────────────────────────────────────────────────────────────
# CATEGORY BREAKDOWN
# ────────────────────────────────────────────────────────────────────────────────
def category_breakdown(transactions: Iterable) -> List[CategoryTotal]:
    """
    Sum amounts per (category, type). A category holding both income and
    expense records shows up once for each type.
    """
    totals: Dict[Tuple[TransactionCategory, TransactionType], Decimal] = defaultdict(Decimal)
    for tx in transactions:
        totals[(TransactionCategory(tx.category), _kind(tx))] += _amount(tx)

    keys = sorted(totals, key=lambda k: (_CATEGORY_ORDER[k[0]], _TYPE_ORDER[k[1]]))
    return [
        CategoryTotal(category=category, type=kind, amount=_cents(totals[(category, kind)]))
        for category, kind in keys
    ]


# ────────────────────────────────────────────────────────────────────────────────
# MONTHLY SERIES
# ────────────────────────────────────────────────────────────────────────────────
def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_label(year: int, month: int) -> str:
    return f"{MONTH_ABBR[month]} {year}"


def monthly_series(transactions: Iterable, months: int = 6) -> List[MonthlyTotal]:
    """
    Income/expense/balance per calendar month of the transaction date,
    oldest first, keeping only the last ``months`` months that have data.
    Months without transactions are absent rather than zero-filled.
    """
    income: Dict[Tuple[int, int], Decimal] = defaultdict(Decimal)
    expense: Dict[Tuple[int, int], Decimal] = defaultdict(Decimal)
    for tx in transactions:
        key = (tx.date.year, tx.date.month)
        if _kind(tx) == TransactionType.income:
            income[key] += _amount(tx)
        else:
            expense[key] += _amount(tx)

    series = []
    for year, month in sorted(set(income) | set(expense)):
        month_income = _cents(income.get((year, month), ZERO))
        month_expense = _cents(expense.get((year, month), ZERO))
        series.append(
            MonthlyTotal(
                key=month_key(year, month),
                month=month_label(year, month),
                income=month_income,
                expense=month_expense,
                balance=month_income - month_expense,
            )
        )
    if months <= 0:
        return []
    return series[-months:]
