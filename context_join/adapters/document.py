"""In-memory text document and line selections for the reference adapter.

WHY: The joining core works on plain line strings. Something has to turn a
file (or an editor buffer) into ordered lines, decide which lines a
selection covers, and write the joined line back. This module is that
plumbing, kept free of any particular editor's API.

HOW: TextDocument holds the lines plus the newline style and whether the
text ended with a newline, so to_text() reproduces the original layout.
Selection is an inclusive, zero-based line range.

RULES:
- A single-line selection covers that line and the next one
- A multi-line selection covers start..end inclusive
- Selection.parse() takes 1-based human ranges ("3-5", "7")
- Lines break on "\r\n" or "\n"; the more frequent style wins for to_text()
- Selections reaching the last line or beyond are not joinable
- line_at() and replace_lines() raise IndexError outside the document
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class Selection:
    """An inclusive range of zero-based line numbers."""

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.end_line < 0:
            raise ValueError("Selection lines must be non-negative")
        if self.end_line < self.start_line:
            raise ValueError(
                "Selection end line {} is before start line {}".format(
                    self.end_line, self.start_line
                )
            )

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line

    @classmethod
    def parse(cls, raw: str) -> Selection:
        """Parse a 1-based line range such as "3-5" or "7".

        Raises:
            ValueError: If the range is malformed or not positive.
        """
        text = raw.strip()
        if "-" in text:
            first, last = text.split("-", 1)
        else:
            first, last = text, text
        try:
            start, end = int(first), int(last)
        except ValueError:
            raise ValueError("Invalid line range '{}'".format(raw)) from None
        if start < 1 or end < 1:
            raise ValueError("Line numbers start at 1, got '{}'".format(raw))
        return cls(start - 1, end - 1)


@dataclass
class TextDocument:
    """A document as a list of lines without terminators.

    Attributes:
        lines: Line texts in order.
        newline: Line separator used when serializing.
        trailing_newline: True if the serialized text ends with a newline.
    """

    lines: List[str] = field(default_factory=list)
    newline: str = "\n"
    trailing_newline: bool = False

    @classmethod
    def from_text(cls, text: str) -> TextDocument:
        """Split text into lines, remembering its newline style."""
        crlf = text.count("\r\n")
        newline = "\r\n" if crlf > text.count("\n") - crlf else "\n"
        lines = _LINE_BREAK.split(text)
        # A final terminator leaves an empty element behind
        trailing = len(lines) > 1 and lines[-1] == ""
        if trailing:
            lines.pop()
        return cls(lines=lines, newline=newline, trailing_newline=trailing)

    def to_text(self) -> str:
        text = self.newline.join(self.lines)
        if self.trailing_newline:
            text += self.newline
        return text

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, index: int) -> str:
        if not 0 <= index < len(self.lines):
            raise IndexError(
                "Line {} is outside the document ({} lines)".format(index, len(self.lines))
            )
        return self.lines[index]

    def replace_lines(self, start: int, end: int, text: str) -> None:
        """Replace lines start..end (inclusive) with a single line."""
        self.line_at(start)
        self.line_at(end)
        self.lines[start:end + 1] = [text]


def selected_line_range(selection: Selection) -> range:
    """Line numbers a selection covers when joining."""
    last = selection.start_line + 1 if selection.is_single_line else selection.end_line
    return range(selection.start_line, last + 1)


def lines_for_selection(document: TextDocument, selection: Selection) -> List[str]:
    """Return the ordered line texts a selection covers."""
    return [document.line_at(i) for i in selected_line_range(selection)]


def is_last_line_in_document(selection: Selection, document: TextDocument) -> bool:
    """True if the selection ends on the document's final line or past it."""
    return selection.end_line >= document.line_count - 1
