"""Spans for locating tokens within the source.

Use `Spanned` to pair a value with the region of source it came from, and
`Span` on its own for code that only needs the location.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """A half-open range `[start, end)` of character offsets into the source."""
    start: int
    end: int

    def slice(self, source: str) -> str:
        return source[self.start:self.end]

    def __repr__(self) -> str:
        return f"Span({self.start}, {self.end})"


@dataclass(frozen=True)
class Spanned:
    inner: Any
    span: Span
