"""Pairwise join and the left-to-right reducer over a line sequence.

WHY: Editors join a selection of N lines, but the joining rules are defined
for two lines at a time. Folding the pairwise join from left to right gives
each step the full accumulated text to classify, so a literal or comment
opened on line 1 is still known to be open when line 3 arrives.

HOW: join_pair() classifies the accumulated text and applies the selected
rule. join_all() reduces the lines with join_pair() via functools.reduce.

RULES:
- join_all([line]) returns line unchanged.
- The fold is strictly left-associative: join(join(L0, L1), L2), ...
  join_pair is neither commutative nor associative; never reorder.
- An empty sequence is a caller error and raises ValueError.
- rules and language are alternatives; passing both raises ValueError.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable, Optional

from context_join.core.context import classify
from context_join.core.rules import apply_rule
from context_join.core.rulesets import RuleSet, get_rule_set

logger = logging.getLogger(__name__)


def resolve_rules(
    rules: Optional[RuleSet] = None,
    language: Optional[str] = None,
) -> RuleSet:
    """Pick the rule set for one invocation from either argument."""
    if rules is not None and language is not None:
        raise ValueError("Pass either rules or language, not both")
    if rules is not None:
        return rules
    return get_rule_set(language)


def _join(accumulated: str, next_line: str, rules: RuleSet) -> str:
    context = classify(accumulated, rules)
    logger.debug("Joining at %s (rule set %s)", context, rules.name)
    return apply_rule(context, accumulated, next_line, rules)


def join_pair(
    line_a: str,
    line_b: str,
    rules: Optional[RuleSet] = None,
    language: Optional[str] = None,
) -> str:
    """Join line_b onto line_a according to the context line_a leaves open.

    Args:
        line_a: Accumulated text (one line or several already joined).
        line_b: The next line, without its line terminator.
        rules: Explicit rule set to use.
        language: Rule-set tag or alias, resolved with get_rule_set().

    Returns:
        The joined line.
    """
    return _join(line_a, line_b, resolve_rules(rules, language))


def join_all(
    lines: Iterable[str],
    rules: Optional[RuleSet] = None,
    language: Optional[str] = None,
) -> str:
    """Join an ordered sequence of lines into one, left to right.

    Args:
        lines: One or more lines, in document order.
        rules: Explicit rule set to use.
        language: Rule-set tag or alias, resolved with get_rule_set().

    Returns:
        The single joined line.

    Raises:
        ValueError: If lines is empty.
    """
    lines = list(lines)
    if not lines:
        raise ValueError("join_all() requires at least one line")
    resolved = resolve_rules(rules, language)
    return functools.reduce(
        lambda accumulated, line: _join(accumulated, line, resolved),
        lines[1:],
        lines[0],
    )
