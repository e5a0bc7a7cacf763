"""
runledger: running-balance ledgers in plain text.

Parse a document of expression and subtotal lines, evaluate the running
balance, and print it back with aligned subtotals.
"""

from runledger.errors import Diagnostic, EvalError, LedgerError, ParseError, UnsupportedOperation
from runledger.evaluator import Evaluator, evaluate
from runledger.nodes import Div, Document, Line, Literal, Mul, Operation, OperationLine, SubtotalLine
from runledger.parser import Parser, parse_document
from runledger.printer import format_decimal, format_value, pretty_print
from runledger.values import Interval, Number, Value, divide, multiply, subtract

__version__ = "0.1.0"

__all__ = [
    # Errors
    "Diagnostic",
    "LedgerError",
    "ParseError",
    "EvalError",
    "UnsupportedOperation",
    # Values
    "Number",
    "Interval",
    "Value",
    "subtract",
    "multiply",
    "divide",
    # Lines and operations
    "Literal",
    "Mul",
    "Div",
    "Operation",
    "OperationLine",
    "SubtotalLine",
    "Line",
    "Document",
    # Pipeline
    "Parser",
    "parse_document",
    "Evaluator",
    "evaluate",
    "format_decimal",
    "format_value",
    "pretty_print",
]
