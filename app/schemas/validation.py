# app/schemas/validation.py
"""
Framework-independent validation of transaction payloads and query strings.

Each ``validate_*`` function returns ``Ok(parsed)`` or ``Err(messages)``;
``unwrap`` turns an ``Err`` into a single ``ValidationError`` whose message is
the individual messages joined with ", ".
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.schemas.transaction import (
    ExportQuery,
    TransactionCreate,
    TransactionQuery,
    TransactionUpdate,
)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    messages: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return ", ".join(self.messages)


ValidationResult = Union[Ok[T], Err]


def error_messages(exc: PydanticValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err["loc"])
        if err["type"] == "value_error":
            messages.append(str(err["ctx"]["error"]))
        elif err["type"] == "missing":
            messages.append(f"{name} is required")
        elif name:
            messages.append(f"{name}: {err['msg']}")
        else:
            messages.append(err["msg"])
    return messages


def _validate(model: Type[M], data: Any) -> ValidationResult[M]:
    if not isinstance(data, Mapping):
        return Err(["Request body must be a JSON object"])
    try:
        return Ok(model.model_validate(dict(data)))
    except PydanticValidationError as exc:
        return Err(error_messages(exc))


def _present(params: Mapping[str, Any]) -> dict:
    # Query strings send "" for cleared inputs; treat those as absent.
    return {key: value for key, value in params.items() if value not in ("", None)}


def validate_create(payload: Any) -> ValidationResult[TransactionCreate]:
    return _validate(TransactionCreate, payload)


def validate_update(payload: Any) -> ValidationResult[TransactionUpdate]:
    return _validate(TransactionUpdate, payload)


def validate_query(params: Mapping[str, Any]) -> ValidationResult[TransactionQuery]:
    return _validate(TransactionQuery, _present(params))


def validate_export_query(params: Mapping[str, Any]) -> ValidationResult[ExportQuery]:
    return _validate(ExportQuery, _present(params))


def unwrap(result: ValidationResult[T]) -> T:
    if isinstance(result, Err):
        raise ValidationError(result.message)
    return result.value
