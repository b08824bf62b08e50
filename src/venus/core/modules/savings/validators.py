from datetime import date, datetime
from decimal import Decimal, DecimalException, InvalidOperation
from math import isfinite
from typing import Any

from bson import Decimal128

from venus.errors import ValidationError

MISSING_FIELDS_MESSAGE = "please provide a label, amount, and lock date."
BAD_AMOUNT_MESSAGE = "amount must be a positive number."


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> Decimal:
    """Coerce a number or numeric string to a positive Decimal.

    The amount must also survive storage as Decimal128 and output as a JSON
    number, so overflowing, underflowing and over-precise values are rejected.

    Raises:
        ValidationError: If the value is not a representable number greater than zero
    """
    if isinstance(value, bool):
        raise ValidationError(BAD_AMOUNT_MESSAGE)
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, int | float):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            raise ValidationError(BAD_AMOUNT_MESSAGE)
    except InvalidOperation as e:
        raise ValidationError(BAD_AMOUNT_MESSAGE) from e

    if not amount.is_finite() or amount <= 0:
        raise ValidationError(BAD_AMOUNT_MESSAGE)

    as_float = float(amount)
    if not isfinite(as_float) or as_float <= 0:
        raise ValidationError(BAD_AMOUNT_MESSAGE)
    try:
        Decimal128(amount)
    except DecimalException as e:
        raise ValidationError(BAD_AMOUNT_MESSAGE) from e
    return amount


def parse_lock_until(value: Any) -> date:
    """Accept a date or an ISO 8601 date string (YYYY-MM-DD)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise ValidationError("lock date must be a date in YYYY-MM-DD format.") from e
    raise ValidationError("lock date must be a date in YYYY-MM-DD format.")
