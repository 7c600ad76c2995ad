"""
Boundary coercion helpers.

Every enum-typed or positive-integer parameter passes through here before
any computation, so bad requests surface as named errors instead of being
silently ignored.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

import structlog

from costboard.shared.core.exceptions import InvalidParameterError, OutOfRangeError

logger = structlog.get_logger()

E = TypeVar("E", bound=Enum)

ALL = "all"


def coerce_enum(enum_cls: Type[E], value: Any, parameter: str) -> E:
    """Map a raw value onto `enum_cls`, accepting members and their string values."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    allowed = [member.value for member in enum_cls]
    logger.warning("invalid_parameter_rejected", parameter=parameter, value=repr(value))
    raise InvalidParameterError(parameter, value, allowed)


def coerce_optional_enum(enum_cls: Type[E], value: Any, parameter: str) -> Optional[E]:
    """Like coerce_enum, but None and the "all" sentinel mean no filter."""
    if value is None or value == ALL:
        return None
    try:
        return coerce_enum(enum_cls, value, parameter)
    except InvalidParameterError:
        allowed = [ALL] + [member.value for member in enum_cls]
        raise InvalidParameterError(parameter, value, allowed) from None


def coerce_positive_int(value: Any, parameter: str) -> int:
    """Page numbers and sizes must be integers >= 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            value = int(value)
        else:
            raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be an integer, got {value!r}.")
    if value <= 0:
        logger.warning("out_of_range_rejected", parameter=parameter, value=value)
        raise OutOfRangeError(parameter, value)
    return value


def coerce_amount(value: Any, parameter: str, minimum: Optional[Decimal] = Decimal("0"),
                  maximum: Optional[Decimal] = None) -> Decimal:
    """Convert a numeric input to Decimal and check its bounds."""
    if isinstance(value, bool):
        raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be numeric, got {value!r}.")
    try:
        # str() first so floats keep their shortest repr (0.1 -> Decimal("0.1"))
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be numeric, got {value!r}.")
    if not amount.is_finite():
        raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be finite, got {value!r}.")
    if minimum is not None and amount < minimum:
        raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be >= {minimum}, got {value!r}.")
    if maximum is not None and amount > maximum:
        raise InvalidParameterError(parameter, value, message=f"'{parameter}' must be <= {maximum}, got {value!r}.")
    return amount
