"""
Monthly profit rollup, consumed from the backend.

The backend owns period boundaries and the arithmetic. Here the payload is
only read and labelled; an absent rollup stays absent instead of being
zero-filled, since "no sales yet" and "zero revenue" are different states.
"""

from datetime import date
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stockbook.config import get_logger
from stockbook.core.entities import MonthlyProfit

logger = get_logger(__name__)

_ROLLUP_FIELDS = ("totalRevenue", "totalCost", "totalProfit")


def _unwrap(payload: Any) -> Any:
    """The rollup is usually enveloped under ``data``."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def parse_monthly_profit(payload: Any, today: date | None = None) -> MonthlyProfit | None:
    """Return the labelled rollup, or None when there is nothing to show."""
    raw = _unwrap(payload)
    if not raw or not isinstance(raw, dict):
        logger.info("monthly_profit_no_data", payload_type=type(raw).__name__)
        return None

    today = today or date.today()
    try:
        return MonthlyProfit.model_validate(
            {**raw, "month": today.strftime("%B"), "year": today.year}
        )
    except PydanticValidationError as e:
        logger.warning(
            "monthly_profit_malformed",
            present=[f for f in _ROLLUP_FIELDS if f in raw],
            errors=e.error_count(),
        )
        return None
