"""
Core utilities for MyWallet backend.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def day_month_label(moment: datetime | None = None) -> str:
    """Format a moment as the DD/MM label shown next to each transaction."""
    moment = moment or datetime.now()
    return moment.strftime("%d/%m")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored amount into a Decimal without float artifacts.

    Floats go through ``str`` so 1500.5 becomes Decimal("1500.5"), not the
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
