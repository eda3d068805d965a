"""
Indented line accumulator for TOON output.
"""

from __future__ import annotations
import io
from typing import Optional, TextIO


class LineWriter:
    """
    Builds output one indented line at a time.

    Lines are separated by a single newline with none after the last one.
    Output goes to the given text sink, or to an internal buffer read back
    with to_string().
    """

    def __init__(self, indent_size: int, output: Optional[TextIO] = None):
        self._buffer: Optional[io.StringIO] = None
        if output is None:
            self._buffer = io.StringIO()
            output = self._buffer
        self._output = output
        self._indentation = " " * indent_size
        self._count = 0

    def push(self, depth: int, content: str) -> "LineWriter":
        """Write a line indented to the given depth."""
        if self._count:
            self._output.write("\n")
        self._output.write(self._indentation * depth + content)
        self._count += 1
        return self

    @property
    def line_count(self) -> int:
        return self._count

    def to_string(self) -> str:
        """Return the buffered text. Empty when writing to an external sink."""
        if self._buffer is None:
            return ""
        return self._buffer.getvalue()
