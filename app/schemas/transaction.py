# app/schemas/transaction.py
from typing import List, Optional
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from datetime import date as date_type, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
import uuid

from app.core.config import settings
from app.models.transaction import TransactionCategory, TransactionType

CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")
MAX_DESCRIPTION_LENGTH = 100
# keeps (page - 1) * limit inside a signed 64-bit OFFSET
MAX_PAGE = (2 ** 63 - 1) // settings.MAX_PAGE_SIZE


# ────────────────────────────────────────────────────────────────────────────────
# DATE HELPERS
# ────────────────────────────────────────────────────────────────────────────────
def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(value) -> datetime:
    """Accept ISO-8601 dates/datetimes (``Z`` suffix included) and return naive UTC."""
    if isinstance(value, datetime):
        try:
            return to_naive_utc(value)
        except OverflowError:
            raise ValueError("Invalid date")
    if isinstance(value, date_type):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Invalid date")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_naive_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        raise ValueError("Invalid date")


def isoformat_utc(value: datetime) -> str:
    """Render a stored datetime as ISO-8601 UTC, e.g. 2024-10-01T00:00:00.000Z"""
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"


# ────────────────────────────────────────────────────────────────────────────────
# PAYLOADS
# ────────────────────────────────────────────────────────────────────────────────
class TransactionBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: TransactionType
    amount: Decimal = Field(..., description="Positive magnitude; direction comes from type")
    category: TransactionCategory
    description: str = Field(..., description="E.g. Groceries")
    date: datetime = Field(..., description="ISO 8601 date/time the transaction occurred on")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_is_number(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("Amount must be a number")
        return value

    @field_validator("amount")
    @classmethod
    def _amount_is_positive(cls, value: Decimal) -> Decimal:
        # range checks come first; quantize overflows on very large exponents
        if value > MAX_AMOUNT:
            raise ValueError("Amount is too large")
        if value <= 0:
            raise ValueError("Amount must be positive")
        value = value.quantize(CENTS, rounding=ROUND_HALF_UP)
        if value <= 0:
            raise ValueError("Amount must be positive")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_not_blank(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Description is required")
        value = value.strip()
        if len(value) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_datetime(value)


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(TransactionBase):
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    category: Optional[TransactionCategory] = None
    description: Optional[str] = None
    date: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data):
        if isinstance(data, dict):
            nulls = [name for name in cls.model_fields if name in data and data[name] is None]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data


# ────────────────────────────────────────────────────────────────────────────────
# QUERY PARAMETERS
# ────────────────────────────────────────────────────────────────────────────────
class SortField(str, Enum):
    date = "date"
    amount = "amount"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class ExportFormat(str, Enum):
    csv = "csv"
    json = "json"


def _positive_int(value, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a positive integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    else:
        raise ValueError(f"{label} must be a positive integer")
    if number < 1:
        raise ValueError(f"{label} must be a positive integer")
    return number


class TransactionFilters(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    category: Optional[TransactionCategory] = None
    type: Optional[TransactionType] = None
    month: Optional[int] = None
    year: Optional[int] = None
    sort_by: SortField = Field(SortField.date, validation_alias="sortBy")
    sort_order: SortOrder = Field(SortOrder.desc, validation_alias="sortOrder")

    @field_validator("month", mode="before")
    @classmethod
    def _valid_month(cls, value):
        try:
            month = _positive_int(value, "Month")
        except ValueError:
            raise ValueError("Month must be between 1 and 12")
        if month > 12:
            raise ValueError("Month must be between 1 and 12")
        return month

    @field_validator("year", mode="before")
    @classmethod
    def _valid_year(cls, value):
        try:
            year = _positive_int(value, "Year")
        except ValueError:
            raise ValueError("Year must be between 1 and 9999")
        if year > 9999:
            raise ValueError("Year must be between 1 and 9999")
        return year


class TransactionQuery(TransactionFilters):
    page: int = 1
    limit: int = 10

    @field_validator("page", mode="before")
    @classmethod
    def _valid_page(cls, value):
        page = _positive_int(value, "Page")
        if page > MAX_PAGE:
            raise ValueError(f"Page must be at most {MAX_PAGE}")
        return page

    @field_validator("limit", mode="before")
    @classmethod
    def _valid_limit(cls, value):
        limit = _positive_int(value, "Limit")
        if limit > settings.MAX_PAGE_SIZE:
            raise ValueError(f"Limit must be at most {settings.MAX_PAGE_SIZE}")
        return limit


class ExportQuery(TransactionFilters):
    format: ExportFormat = ExportFormat.csv


# ────────────────────────────────────────────────────────────────────────────────
# RESPONSES
# ────────────────────────────────────────────────────────────────────────────────
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionRead(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: str = Field(..., alias="userId")
    type: TransactionType
    amount: Decimal
    category: TransactionCategory
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime

    @field_serializer("amount")
    def _amount_as_number(self, value: Decimal) -> float:
        return float(value)

    @field_serializer("date", "created_at", "updated_at")
    def _iso_utc(self, value: datetime) -> str:
        return isoformat_utc(value)


class TransactionData(CamelModel):
    transaction: TransactionRead


class TransactionResponse(CamelModel):
    status: str = "success"
    data: TransactionData


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TransactionListData(CamelModel):
    transactions: List[TransactionRead]
    pagination: Pagination


class TransactionListResponse(CamelModel):
    status: str = "success"
    data: TransactionListData


class MessageResponse(CamelModel):
    status: str = "success"
    message: str


class CategoryTotalRead(CamelModel):
    category: TransactionCategory
    type: TransactionType
    amount: float


class StatsData(CamelModel):
    total_income: float
    total_expense: float
    balance: float
    category_breakdown: List[CategoryTotalRead]


class StatsResponse(CamelModel):
    status: str = "success"
    data: StatsData


class MonthlyStatRead(CamelModel):
    month: str
    income: float
    expense: float
    balance: float


class MonthlyStatsData(CamelModel):
    monthly_stats: List[MonthlyStatRead]


class MonthlyStatsResponse(CamelModel):
    status: str = "success"
    data: MonthlyStatsData


class TransactionImportData(CamelModel):
    created_count: int
    skipped_count: int
    skipped_reasons: List[str]
    transactions: List[TransactionRead]


class TransactionImportResponse(CamelModel):
    status: str = "success"
    data: TransactionImportData
