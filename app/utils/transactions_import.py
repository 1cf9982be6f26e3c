# app/utils/transactions_import.py
"""
Normalization of records exported by the browser-only version of the app.

That version kept transactions in local storage, and early builds stored the
category as an object (``{"name": "Food", "icon": ...}``) rather than a plain
name. Records are normalized into the create payload shape before validation.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from app.models.transaction import TransactionCategory
from app.schemas.transaction import TransactionCreate
from app.schemas.validation import Err, validate_create

PAYLOAD_FIELDS = ("type", "amount", "category", "description", "date")


def normalize_category(category: Any) -> Any:
    if isinstance(category, dict):
        return category.get("name") or TransactionCategory.other.value
    return category


def normalize_legacy_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only payload fields; legacy ids and timestamps are reassigned by the store."""
    record = {key: raw[key] for key in PAYLOAD_FIELDS if key in raw}
    if "category" in record:
        record["category"] = normalize_category(record["category"])
    return record


def extract_records(body: Any) -> List[Any]:
    if isinstance(body, dict) and isinstance(body.get("transactions"), list):
        return body["transactions"]
    if isinstance(body, list):
        return body
    raise ValueError("Import body must be a JSON array of transactions")


def prepare_import(records: List[Any]) -> Tuple[List[TransactionCreate], List[str]]:
    """Validate every record; returns the accepted payloads and one reason per skipped record."""
    accepted: List[TransactionCreate] = []
    skipped_reasons: List[str] = []
    for index, raw in enumerate(records):
        if not isinstance(raw, dict):
            skipped_reasons.append(f"record {index}: not an object")
            continue
        result = validate_create(normalize_legacy_record(raw))
        if isinstance(result, Err):
            skipped_reasons.append(f"record {index}: {result.message}")
            continue
        accepted.append(result.value)
    return accepted, skipped_reasons
