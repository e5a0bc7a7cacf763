"""
Operation trees and document lines produced by the parser.

Trees are owned outright by their line and never shared; `*` and `/` chains are
already folded left-associatively, so `a * b / c` is `Div(Mul(a, b), c)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from runledger.values import Value


@dataclass(frozen=True)
class Literal:
    value: Value


@dataclass(frozen=True)
class Mul:
    left: Operation
    right: Operation


@dataclass(frozen=True)
class Div:
    left: Operation
    right: Operation


Operation = Union[Literal, Mul, Div]


@dataclass
class OperationLine:
    """An expression statement: opening balance or a deduction from it."""
    operation: Operation
    comment: str = ""


@dataclass
class SubtotalLine:
    """A snapshot of the running balance. `value` is filled in by the evaluator."""
    value: Optional[Value] = None
    comment: str = ""


Line = Union[OperationLine, SubtotalLine]
Document = List[Line]
