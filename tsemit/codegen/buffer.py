"""
Writer Buffer.

An indentation-aware text accumulator. Text is stored as an ordered
list of segments, each tagged with the index it was written at, so
content can be spliced before earlier output without editing strings
that were already produced.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..utils.exceptions import WriterStateError
from ..utils.string_utils import indent_text


@dataclass(frozen=True)
class Segment:
    """A chunk of emitted text and the insertion index it was written at."""
    index: int
    text: str
    anchor: Optional[int] = None  # marker index for spliced segments


@dataclass(frozen=True)
class Marker:
    """A recorded position in a buffer: the index of the next segment at mark time."""
    buffer_id: int
    index: int


class WriterBuffer:
    """
    Ordered segment store with scoped indentation.

    Indentation is applied when text is added, so a scope opened after a
    segment was written never re-indents that segment.
    """

    def __init__(self, indent_str: str = "  "):
        self._indent_str = indent_str
        self._segments: List[Segment] = []
        self._next_index = 0
        self._indent_level = 0
        self._at_line_start = True

    @property
    def indent_level(self) -> int:
        return self._indent_level

    def indent(self, levels: int = 1) -> "WriterBuffer":
        self._indent_level += levels
        return self

    def dedent(self, levels: int = 1) -> "WriterBuffer":
        if levels > self._indent_level:
            raise WriterStateError(
                "Cannot dedent below column zero",
                {"indent_level": self._indent_level, "requested": levels},
            )
        self._indent_level -= levels
        return self

    @contextmanager
    def scope(self, levels: int = 1) -> Iterator["WriterBuffer"]:
        """Indent everything appended inside the ``with`` block."""
        self.indent(levels)
        try:
            yield self
        finally:
            self.dedent(levels)

    def _indent(self, text: str, continue_line: bool = False) -> str:
        if not continue_line:
            return indent_text(text, self._indent_level, self._indent_str)
        first, newline, rest = text.partition("\n")
        return first + newline + indent_text(rest, self._indent_level, self._indent_str)

    def _new_segment(self, text: str, anchor: Optional[int] = None, continue_line: bool = False) -> Segment:
        segment = Segment(self._next_index, self._indent(text, continue_line), anchor)
        self._next_index += 1
        return segment

    def append(self, text: str) -> Segment:
        """
        Add text at the write cursor, indented to the current level.

        Text that continues a partially written line is not re-indented
        until its first line break.
        """
        segment = self._new_segment(text, continue_line=not self._at_line_start)
        self._segments.append(segment)
        if text:
            self._at_line_start = text.endswith("\n")
        return segment

    def mark(self) -> Marker:
        """Record the current write position for a later ``insert_before``."""
        return Marker(id(self), self._next_index)

    def insert_before(self, marker: Marker, text: str) -> Segment:
        """
        Splice text before everything written since ``marker`` was taken.

        The target is the first appended segment written at or after the
        mark; splices are placed relative to appended segments only.
        Repeated splices at the same marker keep their call order, and
        splices at an earlier marker land before those at a later one.
        When nothing has been appended since the mark the text goes at
        the end.
        """
        if marker.buffer_id != id(self):
            raise WriterStateError("Marker belongs to a different buffer", {"marker_index": marker.index})

        segment = self._new_segment(text, anchor=marker.index)
        position = next(
            (
                i for i, existing in enumerate(self._segments)
                if existing.anchor is None and existing.index >= marker.index
            ),
            len(self._segments),
        )
        # step back over splices anchored at later markers
        while position > 0:
            previous = self._segments[position - 1]
            if previous.anchor is None or previous.anchor <= marker.index:
                break
            position -= 1
        self._segments.insert(position, segment)
        return segment

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    def is_empty(self) -> bool:
        return not any(segment.text for segment in self._segments)

    def render(self) -> str:
        return "".join(segment.text for segment in self._segments)

    def __len__(self) -> int:
        return sum(len(segment.text) for segment in self._segments)

    def __str__(self) -> str:
        return self.render()
