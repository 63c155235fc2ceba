"""The two user-facing commands: join in place, and join to clipboard.

WHY: Editors expose line joining as commands that act on every selection at
once. The commands own the policies the core does not: which lines a
selection covers, skipping selections that end on the document's last line,
and where the result goes.

HOW: Both commands collect the lines for each selection, fold them with
join_all(), and either replace the selected lines in the document or write
the results to a clipboard backend. A CommandResult reports what was joined
and which selections were skipped.

RULES:
- A selection whose end line is the last line of the document is skipped;
  the remaining selections are still processed
- In-place edits run bottom-up so earlier line numbers stay valid
- A selection overlapping one already joined is skipped
- The clipboard command never edits the document and writes once, with the
  results in document order separated by the document's newline
- The rule set is chosen once per command invocation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from context_join.adapters.clipboard import BaseClipboard
from context_join.adapters.document import (
    Selection,
    TextDocument,
    is_last_line_in_document,
    lines_for_selection,
    selected_line_range,
)
from context_join.core.joiner import join_all
from context_join.core.rulesets import DEFAULT_RULE_SET, RuleSet

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one command invocation.

    Attributes:
        joined: Joined text per processed selection, in document order.
        skipped: Selections that were left untouched.
    """

    joined: List[str] = field(default_factory=list)
    skipped: List[Selection] = field(default_factory=list)


def _overlaps(selection: Selection, claimed: List[range]) -> bool:
    lines = selected_line_range(selection)
    return any(lines.start < other.stop and other.start < lines.stop for other in claimed)


def _partition(
    document: TextDocument,
    selections: Sequence[Selection],
) -> Tuple[List[Selection], List[Selection]]:
    """Split selections into (joinable, skipped), joinable sorted top-down."""
    joinable: List[Selection] = []
    skipped: List[Selection] = []
    claimed: List[range] = []
    for selection in sorted(selections, key=lambda s: (s.start_line, s.end_line)):
        if is_last_line_in_document(selection, document):
            logger.info("Skipping selection %s: ends on the last line", selection)
            skipped.append(selection)
        elif _overlaps(selection, claimed):
            logger.info("Skipping selection %s: overlaps another selection", selection)
            skipped.append(selection)
        else:
            claimed.append(selected_line_range(selection))
            joinable.append(selection)
    return joinable, skipped


def join_lines(
    document: TextDocument,
    selections: Sequence[Selection],
    rules: RuleSet = DEFAULT_RULE_SET,
) -> CommandResult:
    """Join the lines of each selection and replace them in the document.

    Args:
        document: Document to edit in place.
        selections: Selections to join.
        rules: Marker configuration for the document's language.

    Returns:
        CommandResult with the joined lines and skipped selections.
    """
    joinable, skipped = _partition(document, selections)
    joined = [join_all(lines_for_selection(document, s), rules=rules) for s in joinable]

    for selection, text in reversed(list(zip(joinable, joined))):
        lines = selected_line_range(selection)
        document.replace_lines(lines.start, lines.stop - 1, text)

    return CommandResult(joined=joined, skipped=skipped)


def join_lines_to_clipboard(
    document: TextDocument,
    selections: Sequence[Selection],
    clipboard: BaseClipboard,
    rules: RuleSet = DEFAULT_RULE_SET,
) -> CommandResult:
    """Join the lines of each selection and write the results to a clipboard.

    The document is left unchanged. Nothing is written when every selection
    was skipped.
    """
    joinable, skipped = _partition(document, selections)
    joined = [join_all(lines_for_selection(document, s), rules=rules) for s in joinable]
    if joined:
        clipboard.write_text(document.newline.join(joined))
        logger.info("Wrote %d joined selection(s) to %s clipboard", len(joined), clipboard.name)
    return CommandResult(joined=joined, skipped=skipped)


COMMANDS: Dict[str, Callable[..., CommandResult]] = {
    "context-join.join": join_lines,
    "context-join.joinToClipboard": join_lines_to_clipboard,
}
"""Command identifiers an editor integration registers, mapped to handlers."""


def run_command(
    command_id: str,
    document: TextDocument,
    selections: Sequence[Selection],
    rules: RuleSet = DEFAULT_RULE_SET,
    clipboard: Optional[BaseClipboard] = None,
) -> CommandResult:
    """Dispatch a registered command by identifier.

    Raises:
        KeyError: If command_id is not registered.
        ValueError: If the clipboard command is run without a clipboard.
    """
    handler = COMMANDS[command_id]
    if handler is join_lines_to_clipboard:
        if clipboard is None:
            raise ValueError("Command '{}' needs a clipboard".format(command_id))
        return join_lines_to_clipboard(document, selections, clipboard, rules)
    return handler(document, selections, rules)
