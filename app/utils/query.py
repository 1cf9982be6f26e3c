# app/utils/query.py
import calendar
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.core.errors import ValidationError
from app.models.transaction import TransactionCategory, TransactionType
from app.schemas.transaction import SortField, SortOrder, TransactionFilters, TransactionQuery

DateRange = Tuple[datetime, datetime]


@dataclass(frozen=True)
class FetchSpec:
    """Concrete filter + sort + window handed to the record store."""
    category: Optional[TransactionCategory] = None
    type: Optional[TransactionType] = None
    date_range: Optional[DateRange] = None
    sort_by: SortField = SortField.date
    sort_order: SortOrder = SortOrder.desc
    page: int = 1
    limit: Optional[int] = None  # None → every matching record

    @property
    def offset(self) -> int:
        if self.limit is None:
            return 0
        return (self.page - 1) * self.limit


def month_date_range(year: int, month: int) -> DateRange:
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1),
        datetime(year, month, last_day, 23, 59, 59),
    )


def year_date_range(year: int) -> DateRange:
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59)


def resolve_date_range(month: Optional[int], year: Optional[int]) -> Optional[DateRange]:
    """
    month + year → that calendar month, year alone → the whole year.
    A month without a year applies no date filter at all.
    """
    if year is None:
        return None
    if month is None:
        return year_date_range(year)
    return month_date_range(year, month)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def _filters(query: TransactionFilters) -> dict:
    return {
        "category": query.category,
        "type": query.type,
        "date_range": resolve_date_range(query.month, query.year),
        "sort_by": query.sort_by,
        "sort_order": query.sort_order,
    }


def resolve_query(query: TransactionQuery) -> FetchSpec:
    for label, value in (("Page", query.page), ("Limit", query.limit)):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValidationError(f"{label} must be a positive integer")
    return FetchSpec(page=query.page, limit=query.limit, **_filters(query))


def resolve_export(query: TransactionFilters) -> FetchSpec:
    return FetchSpec(**_filters(query))
