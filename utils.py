"""
Utility functions for PotLedger money handling
"""
from __future__ import annotations
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

MICRO_UNITS = 1_000_000  # micro-units per base unit
TOLERANCE = 1e-6

Number = Union[int, float, str, Decimal]


def to_micro(value: Number) -> int:
    """
    Convert an amount in base units to integer micro-units.
    Rounds half away from zero; floats go through their shortest repr
    so 0.1 becomes exactly 100000.
    Raises ValueError for text that is not a number and for inf/NaN.
    """
    if isinstance(value, bool):
        raise TypeError("amount must be a number, not bool")
    if isinstance(value, float):
        value = repr(value)
    try:
        d = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"amount {value!r} is not a number") from None
    if not d.is_finite():
        raise ValueError(f"amount {value!r} is not finite")
    with localcontext() as ctx:
        # enough digits for every integer micro-unit of the value
        ctx.prec = max(28, d.adjusted() + 16)
        try:
            return int(d.scaleb(6).quantize(Decimal(1), rounding=ROUND_HALF_UP))
        except ArithmeticError:
            raise ValueError(f"amount {value!r} is out of range") from None


def from_micro(micro: int) -> float:
    """Convert integer micro-units back to a float amount"""
    return micro / MICRO_UNITS


def round_micro(value: Number) -> float:
    """Round an amount to the nearest micro-unit"""
    return from_micro(to_micro(value))
