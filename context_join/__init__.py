"""context-join: join source lines without breaking comments or literals.

WHY: Naively concatenating two lines of code mangles them: a repeated `//`
ends up mid-comment, a space gets inserted into the middle of a string
literal, and brackets pick up stray padding. This package joins lines the
way a careful programmer would by hand, looking at what the first line
leaves open.

HOW: The public entry points are join_pair(a, b) and join_all(lines). Both
accept either a RuleSet or a language tag ("python", "ts", ...) so callers
select the marker vocabulary once per invocation.

RULES:
- join_pair() and join_all() are the public API for producing joined text.
- join_all() requires at least one line.
- Rule sets are frozen constants; callers never mutate them.
"""

from context_join.core.context import ContextKind, JoinContext, classify
from context_join.core.joiner import join_all, join_pair
from context_join.core.rulesets import (
    RULE_SETS,
    RuleSet,
    UnknownLanguageError,
    get_rule_set,
)

__version__ = "0.1.0"

__all__ = [
    "join_pair",
    "join_all",
    "classify",
    "ContextKind",
    "JoinContext",
    "RuleSet",
    "RULE_SETS",
    "UnknownLanguageError",
    "get_rule_set",
]
