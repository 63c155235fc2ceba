"""Clipboard backends for the "join to clipboard" command.

WHY: The clipboard command must hand its result to something other than the
document. On a desktop that is the system clipboard; in tests and headless
runs it is memory or a text stream. A small interface lets the command stay
the same whichever backend is in use.

HOW: BaseClipboard is an ABC with a ``name`` property and ``write_text()``.
SystemClipboard copies through pyperclip, MemoryClipboard keeps the text on
the instance, StreamClipboard writes it to a file object (stdout by default). CLIPBOARDS maps CLI keys to classes.

RULES:
- write_text() replaces the clipboard content, it never appends
- SystemClipboard raises RuntimeError when pyperclip has no copy
  mechanism on this machine
- Every backend listed in CLIPBOARDS must be importable without side effects
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Dict, Optional, TextIO, Type

import pyperclip


class BaseClipboard(ABC):
    """Abstract destination for joined text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Replace the clipboard content with text."""


class MemoryClipboard(BaseClipboard):
    """Keeps the last written text in ``self.text``."""

    def __init__(self) -> None:
        self.text: Optional[str] = None

    @property
    def name(self) -> str:
        return "Memory"

    def write_text(self, text: str) -> None:
        self.text = text


class StreamClipboard(BaseClipboard):
    """Writes the text, newline-terminated, to a stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def name(self) -> str:
        return "Stream"

    def write_text(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()


class SystemClipboard(BaseClipboard):
    """The desktop clipboard, via pyperclip."""

    @property
    def name(self) -> str:
        return "System"

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise RuntimeError("System clipboard unavailable: {}".format(exc)) from exc


CLIPBOARDS: Dict[str, Type[BaseClipboard]] = {
    "system": SystemClipboard,
    "memory": MemoryClipboard,
    "stream": StreamClipboard,
}
