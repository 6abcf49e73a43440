"""Utility helpers for coercing monetary form input."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENTS_PER_DOLLAR = Decimal(100)
# Largest value of a signed 64-bit integer column
MAX_CENTS = 2**63 - 1


def coerce_amount(raw_value: Any) -> Optional[Decimal]:
    """Coerce a submitted amount to a :class:`~decimal.Decimal`.

    A blank value coerces to zero, the way a numeric conversion of an empty
    string does. ``None`` is returned for values that are not finite numbers.
    """

    if raw_value is None:
        return Decimal(0)

    if isinstance(raw_value, Decimal):
        value = raw_value
    elif isinstance(raw_value, (int, float)):
        try:
            value = Decimal(str(raw_value))
        except InvalidOperation:
            return None
    else:
        text = str(raw_value).strip()
        if not text:
            return Decimal(0)
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None

    if not value.is_finite():
        return None
    return value


def to_cents(amount: Decimal) -> int:
    """Return ``round(amount * 100)`` as an integer count of cents.

    :class:`~decimal.InvalidOperation` is raised when the result needs more
    digits than the current decimal context allows.
    """

    cents = (Decimal(amount) * CENTS_PER_DOLLAR).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return int(cents)


def is_storable_amount(amount: Decimal) -> bool:
    """Return ``True`` if ``amount`` converts to a cents value a BIGINT can hold.

    Amounts below half a cent round to zero cents and are rejected, as are
    amounts too large to quantize or to fit in a signed 64-bit column.
    """

    try:
        cents = to_cents(amount)
    except InvalidOperation:
        return False
    return 0 < cents <= MAX_CENTS
