"""Join rule selector: how two lines meet, given the open context.

WHY: The right way to glue a line onto accumulated text depends on where the
join point sits. Code wants tokens single-spaced; a comment wants its
repeated marker dropped; a string literal wants its content left exactly as
written. Each of these is a small policy, and picking between them is a table
lookup on the context's kind.

HOW: One function per ContextKind, registered in POLICIES. select_rule()
returns the policy for a context and apply_rule() runs it. Every policy
receives the active RuleSet so marker shapes stay configurable per language.

RULES:
- Whitespace is only touched at the join point: trailing whitespace of the
  accumulated text and leading whitespace of the next line.
- Code: one space, except none after an opening bracket or before closing
  punctuation, and none when either side is empty.
- Line comment: strip one leading marker (and the whitespace after it) from
  the next line, then join with one space.
- Block comment: strip a continuation marker if the rule set defines one;
  never insert a closing sequence.
- String literal: verbatim concatenation, no trimming.
- No policy raises for any string input.
"""

from __future__ import annotations

from typing import Callable, Dict

from context_join.core.context import ContextKind, JoinContext
from context_join.core.rulesets import RuleSet

JoinPolicy = Callable[[str, str, RuleSet], str]


def _space_join(left: str, right: str) -> str:
    if not left or not right:
        return left + right
    return left + " " + right


def join_code(accumulated: str, next_line: str, rules: RuleSet) -> str:
    """Join two code fragments with at most one space between them."""
    left = accumulated.rstrip()
    if rules.line_continuation and left.endswith(rules.line_continuation):
        left = left[: -len(rules.line_continuation)].rstrip()
    right = next_line.lstrip()

    if left and left[-1] in rules.opening_brackets:
        return left + right
    if right and right[0] in rules.closing_punctuation:
        return left + right
    return _space_join(left, right)


def join_line_comment(accumulated: str, next_line: str, rules: RuleSet) -> str:
    """Continue a line comment, dropping the next line's own marker."""
    left = accumulated.rstrip()
    right = next_line.lstrip()
    stripped = rules.strip_line_comment_marker(right)
    if stripped is not None:
        right = stripped.lstrip()
    return _space_join(left, right)


def join_block_comment(accumulated: str, next_line: str, rules: RuleSet) -> str:
    """Continue a block comment, dropping a leading continuation marker."""
    left = accumulated.rstrip()
    right = next_line.lstrip()
    if rules.continuation_pattern is not None:
        match = rules.continuation_pattern.match(right)
        if match:
            right = right[match.end():]
    return _space_join(left, right)


def join_string_literal(accumulated: str, next_line: str, rules: RuleSet) -> str:
    """Append literal content exactly as written."""
    return accumulated + next_line


POLICIES: Dict[ContextKind, JoinPolicy] = {
    ContextKind.CODE: join_code,
    ContextKind.LINE_COMMENT: join_line_comment,
    ContextKind.BLOCK_COMMENT: join_block_comment,
    ContextKind.STRING_LITERAL: join_string_literal,
}


def select_rule(context: JoinContext) -> JoinPolicy:
    """Return the joining policy for a context."""
    return POLICIES[context.kind]


def apply_rule(
    context: JoinContext,
    accumulated: str,
    next_line: str,
    rules: RuleSet,
) -> str:
    """Join next_line onto accumulated using the policy for context.

    Args:
        context: Context open at the end of accumulated (from classify()).
        accumulated: Text joined so far.
        next_line: The line being appended.
        rules: Marker configuration for the document's language.

    Returns:
        The joined text.
    """
    return select_rule(context)(accumulated, next_line, rules)
