"""Row/column lookup and annotated excerpts for error reporting.

Spans index the source by character offset. `SourceNavigator` turns those
offsets into 2D positions within the file and renders a one-line excerpt
with the spanned text underlined, for example:

    2 | x := 1 ? 2
               ^

A span that runs past the end of its line is clipped to that line.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List

from .span import Span


@dataclass(frozen=True)
class FilePos2d:
    row: int
    col: int


class SourceNavigator:
    def __init__(self, source: str):
        self.source = source
        # Line heads are the start offsets of each line.
        self.line_heads: List[int] = [0] + [i + 1 for i, c in enumerate(source) if c == '\n']

    def get_position(self, index: int) -> FilePos2d:
        """Gives the 0-indexed line and column of an offset."""
        row = max(bisect_right(self.line_heads, index) - 1, 0)
        return FilePos2d(row, index - self.line_heads[row])

    def _raw_line(self, row: int) -> str:
        start = self.line_heads[row]
        end = self.line_heads[row + 1] if row + 1 < len(self.line_heads) else len(self.source)
        return self.source[start:end].rstrip('\r\n')

    def get_line(self, row: int) -> str:
        """Returns the given line with surrounding whitespace trimmed."""
        return self._raw_line(row).strip()

    def get_annotated_span(self, span: Span) -> str:
        """Returns the line containing the span, with the span underlined."""
        index = span.start
        if index >= len(self.source):
            # End of input goes right after the last non-blank character.
            index = len(self.source.rstrip())
        start = self.get_position(index)
        raw = self._raw_line(start.row)
        content = raw.strip()
        indent = len(raw) - len(raw.lstrip())

        col = start.col - indent
        width = min(span.end, self.line_heads[start.row] + len(raw)) - index
        width = max(width, 1)

        marker = f"{start.row + 1} | "
        underline = ' ' * (len(marker) + max(col, 0)) + '^' + '~' * (width - 1)
        return f"{marker}{content}\n{underline}"
