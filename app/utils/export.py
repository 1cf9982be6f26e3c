# app/utils/export.py
import json
from datetime import date
from decimal import Decimal
from typing import Iterable, List

from app.schemas.transaction import ExportFormat, TransactionRead, isoformat_utc

CSV_HEADER = "id,type,amount,category,description,date,createdAt,updatedAt"

MEDIA_TYPES = {
    ExportFormat.csv: "text/csv",
    ExportFormat.json: "application/json",
}


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _format_amount(amount) -> str:
    """5000.00 → "5000", 12.50 → "12.5" """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def to_csv(transactions: Iterable) -> str:
    """
    Header line, then one line per record. The description is always quoted
    with embedded quotes doubled; the other columns never contain commas.
    """
    rows: List[str] = []
    for tx in transactions:
        rows.append(",".join([
            str(tx.id),
            _enum_value(tx.type),
            _format_amount(tx.amount),
            _enum_value(tx.category),
            _quote(tx.description),
            isoformat_utc(tx.date),
            isoformat_utc(tx.created_at),
            isoformat_utc(tx.updated_at),
        ]))
    return CSV_HEADER + "\n" + "\n".join(rows)


def to_json(transactions: Iterable) -> str:
    records = [
        TransactionRead.model_validate(tx).model_dump(mode="json", by_alias=True)
        for tx in transactions
    ]
    return json.dumps(records, indent=2)


def render(transactions: Iterable, fmt: ExportFormat) -> str:
    if fmt == ExportFormat.json:
        return to_json(transactions)
    return to_csv(transactions)


def export_filename(fmt: ExportFormat, today: date) -> str:
    return f"transactions-{today.isoformat()}.{fmt.value}"
