"""
Error types shared by the parser, evaluator and command-line layer.

Parse failures are collected as `Diagnostic` records (message, byte span,
label) so a caller can render them against the source text. Arithmetic
failures are raised as `EvalError` while the document is being evaluated.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, field_validator


class Diagnostic(BaseModel):
    """A single parse failure located by a half-open UTF-8 byte span."""
    message: str
    span: Tuple[int, int]
    label: str = ""

    @field_validator('span')
    @classmethod
    def span_must_be_ordered(cls, v: Tuple[int, int]) -> Tuple[int, int]:
        start, end = v
        if start < 0 or end < start:
            raise ValueError(f'Invalid span: {v}')
        return v

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]


class LedgerError(Exception):
    """Base class for ledger errors."""
    pass


class ParseError(LedgerError):
    """Raised when a document cannot be parsed completely.

    Holds every diagnostic collected across the document, in source order.
    """

    def __init__(self, diagnostics: List[Diagnostic]):
        self.diagnostics = list(diagnostics)
        if len(self.diagnostics) == 1:
            summary = self.diagnostics[0].message
        else:
            summary = f"{len(self.diagnostics)} parse errors"
        super().__init__(summary)


class EvalError(LedgerError):
    """Raised when evaluation fails, e.g. division by zero."""
    pass


class UnsupportedOperation(EvalError):
    """Raised for interval arithmetic the value model does not define."""
    pass
