# app/core/errors.py
"""
Application error taxonomy and the helpers that map failures onto it.

Every error reaches the client as ``{"status": "error", "message": ...}``
with the status code carried by the exception.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Malformed or out-of-range client input."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Missing record, or a record owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Transaction not found"):
        super().__init__(message)


class DatabaseError(AppError):
    """Unexpected persistence failure; the message never carries driver details."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str) -> dict:
    return {"status": "error", "message": message}


@contextmanager
def database_errors(message: str) -> Iterator[None]:
    """Convert SQLAlchemy failures raised inside the block into DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception(f"{message}: {e.__class__.__name__}")
        raise DatabaseError(message) from e
