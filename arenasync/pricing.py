from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Protocol

ZERO = Decimal("0")
CENTS = Decimal("0.01")
# largest value a NUMERIC(10, 2) store column holds
MAX_AMOUNT = Decimal("99999999.99")


class PricedLine(Protocol):
    price_at_time: Decimal
    quantity: int


def to_amount(value: Any) -> Decimal:
    """
    Lenient numeric parse for form input.
    Blank, missing or malformed values become 0 instead of raising.
    Every desk amount is non-negative, so negatives floor at 0 as well, and
    values the store cannot hold are treated as malformed.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not parsed.is_finite() or parsed < 0 or parsed > MAX_AMOUNT:
        return ZERO
    return parsed


def to_quantity(value: Any) -> int:
    """Parse a quantity and clamp it to a minimum of 1."""
    return max(1, int(to_amount(value)))


def drinks_total(lines: Iterable[PricedLine]) -> Decimal:
    return sum((line.price_at_time * line.quantity for line in lines), ZERO)


def booking_total(
    booking_amount: Any,
    lines: Iterable[PricedLine],
    extra_hours_enabled: bool,
    extra_hours_amount: Any,
) -> Decimal:
    """
    total = booking amount + sum(price_at_time * quantity) + extra-hours fee.

    The extra-hours fee is flat: its duration never enters the total.
    """
    extra = to_amount(extra_hours_amount) if extra_hours_enabled else ZERO
    total = to_amount(booking_amount) + drinks_total(lines) + extra
    return total.quantize(CENTS)


def average(total: Decimal, count: int) -> int:
    """Whole-number average rounded half up; 0 for an empty selection."""
    if count == 0:
        return 0
    return int((total / count).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
