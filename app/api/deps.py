# app/api/deps.py
import uuid

from app.core.config import settings
from app.core.errors import NotFoundError


async def get_owner_id() -> str:
    """
    Owner of every record touched by the request.

    The app is single-user, so this is the configured default owner; store
    functions always receive it explicitly rather than reading a global.
    """
    return settings.DEFAULT_OWNER_ID


def parse_transaction_id(transaction_id: str) -> uuid.UUID:
    # Malformed ids are reported exactly like missing records
    try:
        return uuid.UUID(transaction_id)
    except ValueError:
        raise NotFoundError()
