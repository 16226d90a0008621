from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative_int(value: Any, field_name: str, *, default: int = 0) -> int:
    # Missing and falsy values fall back to the default, like the event documents do.
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return number


def to_amount(value: Any, field_name: str, *, default: Optional[Decimal] = None) -> Decimal:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        # str() first so floats like 0.1 do not carry binary noise
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be finite")
    return amount


def require_non_negative_amount(value: Any, field_name: str, *, default: Optional[Decimal] = None) -> Decimal:
    amount = to_amount(value, field_name, default=default)
    if amount < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return amount


def format_amount(amount: Decimal) -> str:
    """Render an amount without trailing zeros: 50.00 -> '50', 12.50 -> '12.5'."""
    normalized = amount.normalize()
    return format(normalized, "f")
