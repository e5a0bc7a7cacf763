"""
Terminal rendering of parse diagnostics.

    error: found '.' expected number
     --> ledger.txt:1:4
      |
    1 | 12..5
      |    ^^ expected number
"""

from __future__ import annotations

from typing import Iterable, Tuple

from runledger.errors import Diagnostic


def _char_index(text: str, byte_offset: int) -> int:
    return len(text.encode('utf-8')[:byte_offset].decode('utf-8', errors='ignore'))


def locate(text: str, byte_offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of a byte offset."""
    pos = _char_index(text, byte_offset)
    line_start = text.rfind('\n', 0, pos) + 1
    return text.count('\n', 0, pos) + 1, pos - line_start + 1


def render_diagnostic(source_id: str, text: str, diagnostic: Diagnostic) -> str:
    start = _char_index(text, diagnostic.start)
    end = _char_index(text, diagnostic.end)
    line_no, column = locate(text, diagnostic.start)

    line_start = text.rfind('\n', 0, start) + 1
    line_end = text.find('\n', start)
    if line_end == -1:
        line_end = len(text)
    source_line = text[line_start:line_end].rstrip('\r')

    width = max(1, min(end, line_start + len(source_line)) - start)
    gutter = ' ' * len(str(line_no))
    marker = ' ' * (column - 1) + '^' * width
    if diagnostic.label:
        marker += ' ' + diagnostic.label

    return (
        f"error: {diagnostic.message}\n"
        f"{gutter}--> {source_id}:{line_no}:{column}\n"
        f"{gutter} |\n"
        f"{line_no} | {source_line}\n"
        f"{gutter} | {marker}\n"
    )


def render_diagnostics(source_id: str, text: str, diagnostics: Iterable[Diagnostic]) -> str:
    return "\n".join(render_diagnostic(source_id, text, d) for d in diagnostics)
