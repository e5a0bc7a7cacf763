"""
Value model: exact point numbers and closed numeric intervals.

Every value wraps `decimal.Decimal` so chained arithmetic never drifts the way
binary floats do; rounding only happens when a value is printed.

Interval arithmetic here is partial:
- interval * interval is only defined when both lower bounds are >= 0
- interval / interval is never defined
Both raise `UnsupportedOperation` instead of guessing a result.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, DivisionByZero, InvalidOperation
from typing import Union

from runledger.errors import EvalError, UnsupportedOperation

_ZERO = Decimal(0)


@dataclass(frozen=True)
class Number:
    """An exact point value."""
    value: Decimal

    def __sub__(self, other: Value) -> Value:
        return subtract(self, other)

    def __mul__(self, other: Value) -> Value:
        return multiply(self, other)

    def __truediv__(self, other: Value) -> Value:
        return divide(self, other)


@dataclass(frozen=True)
class Interval:
    """A closed interval [lo, hi]. Bound order is not checked."""
    lo: Decimal
    hi: Decimal

    def __sub__(self, other: Value) -> Value:
        return subtract(self, other)

    def __mul__(self, other: Value) -> Value:
        return multiply(self, other)

    def __truediv__(self, other: Value) -> Value:
        return divide(self, other)


Value = Union[Number, Interval]


def subtract(a: Value, b: Value) -> Value:
    if isinstance(a, Number) and isinstance(b, Number):
        return Number(a.value - b.value)
    if isinstance(a, Number) and isinstance(b, Interval):
        # subtracting the larger bound gives the smaller result
        return Interval(a.value - b.hi, a.value - b.lo)
    if isinstance(a, Interval) and isinstance(b, Number):
        return Interval(a.lo - b.value, a.hi - b.value)
    if isinstance(a, Interval) and isinstance(b, Interval):
        return Interval(a.lo - b.hi, a.hi - b.lo)
    raise EvalError(f"Cannot subtract {type(b).__name__} from {type(a).__name__}")


def multiply(a: Value, b: Value) -> Value:
    if isinstance(a, Number) and isinstance(b, Number):
        return Number(a.value * b.value)
    if isinstance(a, Number) and isinstance(b, Interval):
        return Interval(a.value * b.lo, a.value * b.hi)
    if isinstance(a, Interval) and isinstance(b, Number):
        return Interval(a.lo * b.value, a.hi * b.value)
    if isinstance(a, Interval) and isinstance(b, Interval):
        if a.lo >= _ZERO and b.lo >= _ZERO:
            return Interval(a.lo * b.lo, a.hi * b.hi)
        raise UnsupportedOperation(
            f"Interval multiplication with a negative lower bound is not supported: "
            f"[{a.lo}, {a.hi}] * [{b.lo}, {b.hi}]"
        )
    raise EvalError(f"Cannot multiply {type(a).__name__} by {type(b).__name__}")


def _div(n: Decimal, d: Decimal) -> Decimal:
    try:
        return n / d
    except (DivisionByZero, InvalidOperation):
        raise EvalError("Division by zero")


def divide(a: Value, b: Value) -> Value:
    if isinstance(a, Number) and isinstance(b, Number):
        return Number(_div(a.value, b.value))
    if isinstance(a, Number) and isinstance(b, Interval):
        # no sign correction: the caller keeps both bounds on one side of zero
        return Interval(_div(a.value, b.lo), _div(a.value, b.hi))
    if isinstance(a, Interval) and isinstance(b, Number):
        return Interval(_div(a.lo, b.value), _div(a.hi, b.value))
    if isinstance(a, Interval) and isinstance(b, Interval):
        raise UnsupportedOperation(
            f"Interval division by an interval is not supported: "
            f"[{a.lo}, {a.hi}] / [{b.lo}, {b.hi}]"
        )
    raise EvalError(f"Cannot divide {type(a).__name__} by {type(b).__name__}")
