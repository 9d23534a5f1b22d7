"""
Response shape normalization for list endpoints.

The backend returns lists either bare or wrapped under one of several keys,
and occasionally as a single object. This module folds those shapes into
validated entity lists. It never raises: bad input degrades to an empty or
partial list with ``malformed`` set for diagnostics.

Interim compatibility layer; a fixed response envelope upstream makes it
unnecessary.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from stockbook.config import get_logger
from stockbook.core.entities import InventoryItem, Invoice, Order

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_CANDIDATE_KEYS: tuple[str, ...] = ("data", "items", "inventory", "orders", "invoices")


class PayloadSource(str, Enum):
    """Where the list was found in the payload."""

    ARRAY = "array"
    KEY = "key"
    SINGLE_OBJECT = "single_object"
    NONE = "none"


@dataclass(frozen=True)
class ListShape(Generic[T]):
    """Per-endpoint normalization rules."""

    name: str
    model: type[T]
    candidate_keys: tuple[str, ...] = DEFAULT_CANDIDATE_KEYS
    # Only where the backend is known to answer with one bare record
    allow_single_object: bool = False


INVENTORY_LIST = ListShape(
    "inventory", InventoryItem, ("items", "data", "inventory"), allow_single_object=True
)
ORDER_LIST = ListShape("orders", Order, ("orders", "data"))
INVOICE_LIST = ListShape("invoices", Invoice, ("invoices", "data"))


@dataclass
class NormalizedList(Generic[T]):
    """Validated records plus diagnostics about the raw payload."""

    items: list[T]
    source: PayloadSource
    key: str | None = None
    dropped: int = 0
    malformed: bool = False

    @property
    def received(self) -> int:
        return len(self.items) + self.dropped


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def extract_records(
    payload: Any,
    candidate_keys: Sequence[str] = DEFAULT_CANDIDATE_KEYS,
    allow_single_object: bool = False,
) -> tuple[list[Any], PayloadSource, str | None]:
    """Find the raw record list inside a payload without validating entries."""
    if _is_sequence(payload):
        return list(payload), PayloadSource.ARRAY, None

    if isinstance(payload, dict):
        for key in candidate_keys:
            value = payload.get(key)
            if _is_sequence(value):
                return list(value), PayloadSource.KEY, key
        if allow_single_object and payload:
            return [payload], PayloadSource.SINGLE_OBJECT, None

    return [], PayloadSource.NONE, None


def _validate(model: type[T], raw: Any) -> T | None:
    if isinstance(raw, model):
        return raw
    if not isinstance(raw, dict):
        return None
    try:
        return model.model_validate(raw)
    except (PydanticValidationError, ValueError, TypeError):
        return None


def normalize_list(payload: Any, shape: ListShape[T]) -> NormalizedList[T]:
    """Normalize a list endpoint payload into validated entities."""
    raw_items, source, key = extract_records(
        payload, shape.candidate_keys, shape.allow_single_object
    )

    items: list[T] = []
    dropped = 0
    for raw in raw_items:
        record = _validate(shape.model, raw)
        if record is None:
            dropped += 1
        else:
            items.append(record)

    # An empty list under a known key is a valid "nothing yet"
    malformed = source == PayloadSource.NONE or dropped > 0
    result = NormalizedList(
        items=items, source=source, key=key, dropped=dropped, malformed=malformed
    )

    if malformed:
        logger.warning(
            "list_response_malformed",
            shape=shape.name,
            source=source.value,
            payload_type=type(payload).__name__,
            dropped=dropped,
            kept=len(items),
        )
    return result


def normalize_object(
    payload: Any,
    model: type[T],
    candidate_keys: Sequence[str] = ("data",),
) -> T | None:
    """Normalize a single-record payload, bare or wrapped. Never raises."""
    if not isinstance(payload, dict):
        return None

    for key in candidate_keys:
        nested = payload.get(key)
        if isinstance(nested, dict):
            record = _validate(model, nested)
            if record is not None:
                return record

    return _validate(model, payload)
