"""
Pretty-printer for evaluated documents.

Left-hand sides (expressions and subtotal values) are right-aligned in one
column, comments follow after a single space. Each subtotal row is preceded by
a dashed separator as wide as the column and followed by a blank line.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal, getcontext
from typing import List

from runledger.nodes import Div, Document, Line, Literal, Mul, Operation, OperationLine, SubtotalLine
from runledger.values import Interval, Number, Value

DEFAULT_PRECISION = 2


def format_decimal(d: Decimal, precision: int = DEFAULT_PRECISION) -> str:
    """Round to `precision` places, then drop insignificant zeros: 10.500 -> 10.5, 10.00 -> 10."""
    quantum = Decimal(1).scaleb(-precision)
    # quantize needs enough digits for the integer part as well
    context = Context(prec=max(getcontext().prec, d.adjusted() + precision + 2))
    rounded = d.quantize(quantum, rounding=ROUND_HALF_EVEN, context=context)
    text = format(rounded, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text


def format_value(value: Value, precision: int = DEFAULT_PRECISION) -> str:
    if isinstance(value, Number):
        return format_decimal(value.value, precision)
    if isinstance(value, Interval):
        return f"[{format_decimal(value.lo, precision)}, {format_decimal(value.hi, precision)}]"
    raise TypeError(f"Not a value: {value!r}")


def format_operation(node: Operation, precision: int = DEFAULT_PRECISION) -> str:
    # No parentheses: the tree is already left-associative.
    if isinstance(node, Literal):
        return format_value(node.value, precision)
    if isinstance(node, Mul):
        return f"{format_operation(node.left, precision)} * {format_operation(node.right, precision)}"
    if isinstance(node, Div):
        return f"{format_operation(node.left, precision)} / {format_operation(node.right, precision)}"
    raise TypeError(f"Not an operation: {node!r}")


def left_hand_side(line: Line, precision: int = DEFAULT_PRECISION) -> str:
    if isinstance(line, OperationLine):
        return format_operation(line.operation, precision)
    if line.value is None:
        return ""
    return format_value(line.value, precision)


def pretty_print(document: Document, precision: int = DEFAULT_PRECISION) -> str:
    lhs = [left_hand_side(line, precision) for line in document]
    width = max((len(text) for text in lhs), default=0)

    rows: List[str] = []
    for text, line in zip(lhs, document):
        if isinstance(line, SubtotalLine):
            rows.append('-' * width)
            rows.append(f"{text.rjust(width)} {line.comment}")
            rows.append('')
        else:
            rows.append(f"{text.rjust(width)} {line.comment}")
    return ''.join(row + '\n' for row in rows)
