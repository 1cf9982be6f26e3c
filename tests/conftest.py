"""Shared fixtures: a throwaway SQLite database behind the real app."""

import asyncio
import os
import tempfile
from pathlib import Path

# Must be set before anything imports app.core.config
_DB_DIR = Path(tempfile.mkdtemp(prefix="expense-tracker-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import AsyncSessionLocal, create_db_and_tables, drop_db_and_tables
from app.crud.transaction import create_transaction_for_user, seed_sample_transactions
from app.main import app
from app.schemas.transaction import TransactionCreate

API = settings.API_V1_PREFIX


async def _reset_database(seed: bool) -> None:
    await drop_db_and_tables()
    await create_db_and_tables()
    if seed:
        async with AsyncSessionLocal() as session:
            await seed_sample_transactions(settings.DEFAULT_OWNER_ID, session)


async def _insert(owner_id: str, payload: dict):
    async with AsyncSessionLocal() as session:
        return await create_transaction_for_user(owner_id, TransactionCreate(**payload), session)


def insert_transaction(owner_id: str, **payload):
    """Insert a record directly through the store, bypassing the HTTP owner."""
    data = {
        "type": "expense",
        "amount": 10,
        "category": "Other",
        "description": "Direct insert",
        "date": "2024-10-01",
    }
    data.update(payload)
    return asyncio.run(_insert(owner_id, data))


@pytest.fixture
def client():
    asyncio.run(_reset_database(seed=False))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client():
    asyncio.run(_reset_database(seed=True))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def insert():
    return insert_transaction
