"""Reference editor adapter: documents, selections, commands, clipboards.

WHY: The joining core is editor-agnostic. This package shows the adapter
side of the contract in plain Python so the CLI and the HTTP service can
drive the same two commands an editor plugin would register.

HOW: document.py models lines and selections, commands.py implements
"join in place" and "join to clipboard", clipboard.py provides the clipboard
backends.

RULES:
- Selections ending on the document's last line are skipped
- Adapters never reach into the core's classifier; they call join_all()
"""

from context_join.adapters.commands import (
    COMMANDS,
    CommandResult,
    join_lines,
    join_lines_to_clipboard,
    run_command,
)
from context_join.adapters.document import Selection, TextDocument

__all__ = [
    "COMMANDS",
    "CommandResult",
    "Selection",
    "TextDocument",
    "join_lines",
    "join_lines_to_clipboard",
    "run_command",
]
