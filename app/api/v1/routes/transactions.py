# app/api/v1/routes/transactions.py
from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Any
import logging

from app.schemas.transaction import (
    CategoryTotalRead,
    MessageResponse,
    MonthlyStatRead,
    MonthlyStatsData,
    MonthlyStatsResponse,
    Pagination,
    StatsData,
    StatsResponse,
    TransactionData,
    TransactionImportData,
    TransactionImportResponse,
    TransactionListData,
    TransactionListResponse,
    TransactionRead,
    TransactionResponse,
)
from app.schemas.validation import (
    unwrap,
    validate_create,
    validate_export_query,
    validate_query,
    validate_update,
)
from app.crud.transaction import (
    bulk_create_transactions_for_user,
    create_transaction_for_user,
    delete_transaction,
    find_transactions,
    get_transaction_by_id,
    get_transactions_for_user,
    list_transactions,
    update_transaction,
)
from app.core.database import get_async_session
from app.core.errors import NotFoundError, ValidationError, database_errors
from app.api.deps import get_owner_id, parse_transaction_id
from app.utils.export import MEDIA_TYPES, export_filename, render
from app.utils.query import resolve_export, resolve_query, total_pages
from app.utils.stats import category_breakdown, monthly_series, summarize
from app.utils.transactions_import import extract_records, prepare_import

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


# ------------------------------------------------------------
# AGGREGATES & EXPORT (registered before /{transaction_id})
# ------------------------------------------------------------
@router.get("/stats", response_model=StatsResponse)
async def read_transaction_stats(
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    """Income/expense totals, balance and per-(category, type) breakdown"""
    with database_errors("Failed to fetch transaction statistics"):
        transactions = await get_transactions_for_user(owner_id, db)

    summary = summarize(transactions)
    breakdown = [
        CategoryTotalRead(category=item.category, type=item.type, amount=float(item.amount))
        for item in category_breakdown(transactions)
    ]
    return StatsResponse(
        data=StatsData(
            total_income=float(summary.total_income),
            total_expense=float(summary.total_expense),
            balance=float(summary.balance),
            category_breakdown=breakdown,
        )
    )


@router.get("/monthly", response_model=MonthlyStatsResponse)
async def read_monthly_stats(
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    """Per-month totals for the last six months that have transactions"""
    with database_errors("Failed to fetch monthly statistics"):
        transactions = await get_transactions_for_user(owner_id, db)

    monthly_stats = [
        MonthlyStatRead(
            month=item.month,
            income=float(item.income),
            expense=float(item.expense),
            balance=float(item.balance),
        )
        for item in monthly_series(transactions)
    ]
    return MonthlyStatsResponse(data=MonthlyStatsData(monthly_stats=monthly_stats))


@router.get("/export")
async def export_transactions(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    """Download every transaction matching the filters as CSV or JSON"""
    query = unwrap(validate_export_query(request.query_params))
    spec = resolve_export(query)
    with database_errors("Failed to export transactions"):
        transactions = await find_transactions(owner_id, spec, db)

    logger.info(f"Exporting {len(transactions)} transactions as {query.format.value}")
    filename = export_filename(query.format, date.today())
    return Response(
        content=render(transactions, query.format),
        media_type=MEDIA_TYPES[query.format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=TransactionImportResponse, status_code=status.HTTP_201_CREATED)
async def import_transactions(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    """
    Import a JSON export, including exports from the browser-only version
    whose records carry object-valued categories. Invalid records are skipped
    and reported; valid ones are inserted together.
    """
    try:
        records = extract_records(payload)
    except ValueError as e:
        raise ValidationError(str(e))

    tx_inputs, skipped_reasons = prepare_import(records)
    with database_errors("Failed to import transactions"):
        created = await bulk_create_transactions_for_user(owner_id, tx_inputs, db)

    logger.info(f"Imported {len(created)} transactions, skipped {len(skipped_reasons)}")
    return TransactionImportResponse(
        data=TransactionImportData(
            created_count=len(created),
            skipped_count=len(skipped_reasons),
            skipped_reasons=skipped_reasons,
            transactions=[TransactionRead.model_validate(tx) for tx in created],
        )
    )


# ------------------------------------------------------------
# CRUD
# ------------------------------------------------------------
@router.get("", response_model=TransactionListResponse)
async def read_transactions(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    query = unwrap(validate_query(request.query_params))
    spec = resolve_query(query)
    with database_errors("Failed to fetch transactions"):
        transactions, total = await list_transactions(owner_id, spec, db)

    return TransactionListResponse(
        data=TransactionListData(
            transactions=[TransactionRead.model_validate(tx) for tx in transactions],
            pagination=Pagination(
                page=spec.page,
                limit=spec.limit,
                total=total,
                total_pages=total_pages(total, spec.limit),
            ),
        )
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    tx_in = unwrap(validate_create(payload))
    with database_errors("Failed to create transaction"):
        tx = await create_transaction_for_user(owner_id, tx_in, db)
    logger.info(f"Created transaction {tx.id}")
    return TransactionResponse(data=TransactionData(transaction=TransactionRead.model_validate(tx)))


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def read_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    tx_id = parse_transaction_id(transaction_id)
    with database_errors("Failed to fetch transaction"):
        tx = await get_transaction_by_id(tx_id, owner_id, db)
    if not tx:
        raise NotFoundError()
    return TransactionResponse(data=TransactionData(transaction=TransactionRead.model_validate(tx)))


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction_endpoint(
    transaction_id: str,
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    tx_id = parse_transaction_id(transaction_id)
    tx_in = unwrap(validate_update(payload))
    with database_errors("Failed to update transaction"):
        tx = await get_transaction_by_id(tx_id, owner_id, db)
        if not tx:
            raise NotFoundError()
        tx = await update_transaction(tx, tx_in, db)
    return TransactionResponse(data=TransactionData(transaction=TransactionRead.model_validate(tx)))


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction_endpoint(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    owner_id: str = Depends(get_owner_id),
):
    tx_id = parse_transaction_id(transaction_id)
    with database_errors("Failed to delete transaction"):
        tx = await get_transaction_by_id(tx_id, owner_id, db)
        if not tx:
            raise NotFoundError()
        await delete_transaction(tx, db)
    logger.info(f"Deleted transaction {tx_id}")
    return MessageResponse(message="Transaction deleted successfully")
