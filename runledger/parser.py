"""
Recursive-descent parser for running-ledger documents.

Grammar (inline whitespace is space or tab):

    number         : '-'? DIGITS ('.' DIGITS)?
    interval       : '[' ws? number ws? ',' ws? number ws? ']'
    value          : number | interval
    operation_line : ws? value (ws? ('*' | '/') ws? value)* (ws+ comment)? EOL
    subtotal_line  : '-'* ws? NEWLINE result_line
    result_line    : ws? value (ws+ comment)? EOL | ws? comment EOL
    line           : operation_line | subtotal_line
    document       : (line WHITESPACE*)* EOF

'*' and '/' share one precedence level and fold strictly left to right. An
operator that is not followed by a value is left for the comment, so
"5 * rent" is the value 5 with the comment "* rent".

Failures are tracked at the furthest position reached on the current line,
together with every label expected there, which gives messages such as
"found '.' expected number". A failed line is reported and skipped so that
later lines are still checked; the document as a whole then raises a single
ParseError with all diagnostics.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import List

from runledger.errors import Diagnostic, ParseError
from runledger.nodes import Div, Document, Line, Literal, Mul, Operation, OperationLine, SubtotalLine
from runledger.values import Interval, Number, Value

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r'[0-9]+')
_INLINE_WS = ' \t'
_OPERATORS = ('*', '/')


class _Backtrack(Exception):
    """Internal signal that the current alternative did not match."""
    pass


class Parser:
    """Parses a whole document. Positions are str indices; spans are reported in UTF-8 bytes."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)
        self._furthest = 0
        self._expected: List[str] = []

    # ---------------------------
    # Low-level helpers
    # ---------------------------

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _expect(self, label: str) -> None:
        """Record that `label` would have been accepted at the current position."""
        if self.pos > self._furthest:
            self._furthest = self.pos
            self._expected = [label]
        elif self.pos == self._furthest and label not in self._expected:
            self._expected.append(label)

    def _fail(self, label: str) -> _Backtrack:
        self._expect(label)
        return _Backtrack(label)

    def _skip_inline_whitespace(self) -> int:
        start = self.pos
        while self._peek() and self._peek() in _INLINE_WS:
            self.pos += 1
        return self.pos - start

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek().isspace():
            self.pos += 1

    def _at_line_end(self) -> bool:
        ch = self._peek()
        return ch == '' or ch == '\n' or (ch == '\r' and self._peek(1) == '\n')

    def _consume_line_break(self) -> bool:
        if self._peek() == '\n':
            self.pos += 1
            return True
        if self._peek() == '\r' and self._peek(1) == '\n':
            self.pos += 2
            return True
        return False

    def _line_end_from(self, pos: int) -> int:
        end = self.text.find('\n', pos)
        if end == -1:
            return self.len
        if end > pos and self.text[end - 1] == '\r':
            return end - 1
        return end

    def _read_to_line_end(self) -> str:
        end = self._line_end_from(self.pos)
        comment = self.text[self.pos:end]
        self.pos = end
        return comment

    def _byte_offset(self, pos: int) -> int:
        return len(self.text[:pos].encode('utf-8'))

    # ---------------------------
    # Literals
    # ---------------------------

    def parse_number(self) -> Number:
        start = self.pos
        if self._peek() == '-':
            self.pos += 1
        m = _DIGITS_RE.match(self.text, self.pos)
        if m is None:
            raise self._fail('number')
        self.pos = m.end()
        if self._peek() == '.':
            self.pos += 1
            m = _DIGITS_RE.match(self.text, self.pos)
            if m is None:
                raise self._fail('number')
            self.pos = m.end()
        return Number(Decimal(self.text[start:self.pos]))

    def parse_interval(self) -> Interval:
        if self._peek() != '[':
            raise self._fail('interval')
        self.pos += 1
        self._skip_inline_whitespace()
        lo = self.parse_number()
        self._skip_inline_whitespace()
        if self._peek() != ',':
            raise self._fail("','")
        self.pos += 1
        self._skip_inline_whitespace()
        hi = self.parse_number()
        self._skip_inline_whitespace()
        if self._peek() != ']':
            raise self._fail("']'")
        self.pos += 1
        return Interval(lo.value, hi.value)

    def parse_value(self) -> Value:
        start = self.pos
        try:
            return self.parse_number()
        except _Backtrack:
            self.pos = start
        return self.parse_interval()

    # ---------------------------
    # Lines
    # ---------------------------

    def parse_operation(self) -> Operation:
        """value (('*' | '/') value)*, folded left."""
        self._skip_inline_whitespace()
        node: Operation = Literal(self.parse_value())
        while True:
            save = self.pos
            self._skip_inline_whitespace()
            op = self._peek()
            if op not in _OPERATORS:
                for expected in _OPERATORS:
                    self._expect(f"'{expected}'")
                self.pos = save
                return node
            self.pos += 1
            self._skip_inline_whitespace()
            try:
                right = Literal(self.parse_value())
            except _Backtrack:
                # not an operand: the operator starts the comment
                self.pos = save
                return node
            node = Mul(node, right) if op == '*' else Div(node, right)

    def _parse_trailing_comment(self) -> str:
        """(ws+ comment)? followed by end of line."""
        if self._skip_inline_whitespace():
            return self._read_to_line_end()
        if not self._at_line_end():
            raise self._fail('end of line')
        return ''

    def parse_operation_line(self) -> OperationLine:
        operation = self.parse_operation()
        comment = self._parse_trailing_comment()
        return OperationLine(operation, comment)

    def parse_result_line(self) -> SubtotalLine:
        start = self.pos
        self._skip_inline_whitespace()
        try:
            value = self.parse_value()
            comment = self._parse_trailing_comment()
            return SubtotalLine(value, comment)
        except _Backtrack:
            self.pos = start
        self._skip_inline_whitespace()
        return SubtotalLine(None, self._read_to_line_end())

    def parse_subtotal_line(self) -> SubtotalLine:
        while self._peek() == '-':
            self.pos += 1
        self._skip_inline_whitespace()
        if not self._consume_line_break():
            raise self._fail('result line')
        return self.parse_result_line()

    def parse_line(self) -> Line:
        start = self.pos
        try:
            return self.parse_operation_line()
        except _Backtrack:
            self.pos = start
        return self.parse_subtotal_line()

    # ---------------------------
    # Document
    # ---------------------------

    def _diagnostic(self) -> Diagnostic:
        pos = self._furthest
        if pos >= self.len:
            found = 'end of input'
        elif self.text[pos] in '\r\n':
            found = 'end of line'
        else:
            found = repr(self.text[pos])
        end = max(self._line_end_from(pos), pos)
        if end == pos and pos < self.len:
            end = pos + 1
        expected = _join_labels(self._expected)
        return Diagnostic(
            message=f"found {found} expected {expected}",
            span=(self._byte_offset(pos), self._byte_offset(end)),
            label=f"expected {expected}",
        )

    def parse(self) -> Document:
        lines: Document = []
        diagnostics: List[Diagnostic] = []
        while self.pos < self.len:
            self._furthest = self.pos
            self._expected = []
            try:
                lines.append(self.parse_line())
            except _Backtrack:
                diagnostics.append(self._diagnostic())
                # resume on the line after the failure
                nl = self.text.find('\n', self._furthest)
                self.pos = self.len if nl == -1 else nl + 1
                continue
            self._skip_whitespace()
        if diagnostics:
            logger.debug(f"Parse failed with {len(diagnostics)} error(s)")
            raise ParseError(diagnostics)
        logger.debug(f"Parsed {len(lines)} line(s)")
        return lines


def _join_labels(labels: List[str]) -> str:
    if not labels:
        return 'something else'
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " or " + labels[-1]


def parse_document(text: str) -> Document:
    """Parse a whole document or raise ParseError listing every failed line."""
    return Parser(text).parse()
