"""Number parsing utilities for order payloads."""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce a JSON number or numeric string to Decimal.

    Empty strings and None mean "no value". Floats go through str() so that
    12.1 stays 12.1 instead of its binary expansion.

    Raises:
        ValueError: if the value is not a finite number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError('expected a number')

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            number = Decimal(cleaned)
        except InvalidOperation:
            raise ValueError(f"'{value}' is not a valid number")
    else:
        raise ValueError('expected a number')

    if not number.is_finite():
        raise ValueError(f"'{value}' is not a valid number")
    return number


def parse_non_negative_decimal(value: Any) -> Optional[Decimal]:
    """Like parse_decimal, rejecting values below zero (weights, prices)."""
    number = parse_decimal(value)
    if number is not None and number < 0:
        raise ValueError('value must not be negative')
    return number


def parse_int(value: Any) -> Optional[int]:
    """
    Coerce ids and bag counts to int.

    Accepts "12", 12 and 12.0; rejects 12.5 and anything non-numeric.
    """
    number = parse_decimal(value)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValueError(f"'{value}' is not a whole number")
    return int(number)


def compute_net_weight(first_weight: Optional[Decimal], second_weight: Optional[Decimal]) -> Optional[Decimal]:
    """
    Net weight of a load: |second - first|.

    Trucks are weighed empty or full first depending on direction, so the
    order of the two weighings does not matter. None unless both are present.
    """
    if first_weight is None or second_weight is None:
        return None
    return abs(Decimal(second_weight) - Decimal(first_weight))
