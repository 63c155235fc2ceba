"""Language rule sets: the marker vocabulary the classifier and joiner use.

WHY: Comment markers, string delimiters and continuation shapes differ per
language. `#` starts a comment in Python but is ordinary code in C; a
backtick opens a template literal in JavaScript but means nothing in Go's
comments. Keeping these as plain data lets a caller pick a language once per
invocation and pass the result down, without subclassing anything.

HOW: A RuleSet is a frozen dataclass. RULE_SETS maps language tags to rule
sets and LANGUAGE_ALIASES maps editor language ids ("py", "typescriptreact")
to those tags. get_rule_set() resolves a tag or alias, falling back to the
default C-family rule set when no language is given.

RULES:
- Rule sets are frozen constants; derive variants with dataclasses.replace().
- line_comment_markers are matched longest first ("///" before "//").
- string_delimiters is a subset of ', " and `; anything else is rejected.
- continuation_pattern=None disables block-comment continuation stripping.
- Unknown tags raise UnknownLanguageError, never silently fall back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

SUPPORTED_DELIMITERS = ("'", '"', "`")
"""Literal delimiters the classifier has states for."""

DEFAULT_CONTINUATION = re.compile(r"\*(?!/)(?:\s+|$)")
"""A leading `*` followed by whitespace or end of line, but never `*/`."""


class UnknownLanguageError(ValueError):
    """Raised when a language tag has no rule set.

    RULES:
    - Message lists the available tags
    """

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(
            "Unknown language '{}'. Available: {}".format(
                language, ", ".join(sorted(RULE_SETS.keys()))
            )
        )


@dataclass(frozen=True)
class RuleSet:
    """Marker configuration for one language family.

    Attributes:
        name: Tag under which the rule set is registered.
        line_comment_markers: Markers that comment out the rest of a line.
        block_comment: (open, close) pair, or None if the language has none.
        string_delimiters: Characters that open and close literals.
        escape_char: Escape prefix inside literals.
        continuation_pattern: Leading marker stripped from block-comment
            continuation lines, or None to keep lines as they are.
        line_continuation: Trailing marker that continues a code line
            (Python and shell backslash), dropped when joining code.
        opening_brackets: Characters after which no space is inserted.
        closing_punctuation: Characters before which no space is inserted.
    """

    name: str
    line_comment_markers: Tuple[str, ...] = ("///", "//")
    block_comment: Optional[Tuple[str, str]] = ("/*", "*/")
    string_delimiters: Tuple[str, ...] = ("'", '"', "`")
    escape_char: str = "\\"
    continuation_pattern: Optional[re.Pattern] = DEFAULT_CONTINUATION
    line_continuation: Optional[str] = None
    opening_brackets: str = "([{"
    closing_punctuation: str = ")]},;"

    def __post_init__(self) -> None:
        for delimiter in self.string_delimiters:
            if delimiter not in SUPPORTED_DELIMITERS:
                raise ValueError(
                    "Unsupported string delimiter {!r} in rule set '{}'".format(
                        delimiter, self.name
                    )
                )
        # Longest first so "///" wins over "//" and "--[[" over "--".
        ordered = tuple(sorted(self.line_comment_markers, key=len, reverse=True))
        object.__setattr__(self, "line_comment_markers", ordered)

    def strip_line_comment_marker(self, text: str) -> Optional[str]:
        """Return text without one leading comment marker, or None if absent."""
        for marker in self.line_comment_markers:
            if text.startswith(marker):
                return text[len(marker):]
        return None


# C-family markers with all three delimiters
DEFAULT_RULE_SET = RuleSet(name="default")

RULE_SETS: Dict[str, RuleSet] = {
    "default": DEFAULT_RULE_SET,
    "c": RuleSet(
        name="c",
        string_delimiters=("'", '"'),
        line_continuation="\\",
    ),
    "cpp": RuleSet(
        name="cpp",
        string_delimiters=("'", '"'),
        line_continuation="\\",
    ),
    "csharp": RuleSet(
        name="csharp",
        line_comment_markers=("///", "//"),
        string_delimiters=("'", '"'),
    ),
    "java": RuleSet(name="java", string_delimiters=("'", '"')),
    "go": RuleSet(name="go", string_delimiters=("'", '"', "`")),
    "rust": RuleSet(
        name="rust",
        line_comment_markers=("///", "//!", "//"),
        string_delimiters=('"',),
    ),
    "javascript": RuleSet(name="javascript"),
    "typescript": RuleSet(name="typescript"),
    "css": RuleSet(
        name="css",
        line_comment_markers=(),
        string_delimiters=("'", '"'),
    ),
    "python": RuleSet(
        name="python",
        line_comment_markers=("#",),
        block_comment=None,
        string_delimiters=("'", '"'),
        continuation_pattern=None,
        line_continuation="\\",
    ),
    "shell": RuleSet(
        name="shell",
        line_comment_markers=("#",),
        block_comment=None,
        string_delimiters=("'", '"', "`"),
        continuation_pattern=None,
        line_continuation="\\",
    ),
    "ruby": RuleSet(
        name="ruby",
        line_comment_markers=("#",),
        block_comment=None,
        string_delimiters=("'", '"', "`"),
        continuation_pattern=None,
        line_continuation="\\",
    ),
    "sql": RuleSet(
        name="sql",
        line_comment_markers=("--",),
        string_delimiters=("'", '"'),
    ),
    "lua": RuleSet(
        name="lua",
        line_comment_markers=("--",),
        block_comment=("--[[", "]]"),
        string_delimiters=("'", '"'),
        continuation_pattern=None,
    ),
}

# Editor language ids and file-extension style shorthands
LANGUAGE_ALIASES: Dict[str, str] = {
    "h": "c",
    "c++": "cpp",
    "cc": "cpp",
    "hpp": "cpp",
    "cs": "csharp",
    "golang": "go",
    "rs": "rust",
    "js": "javascript",
    "jsx": "javascript",
    "javascriptreact": "javascript",
    "mjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "typescriptreact": "typescript",
    "scss": "css",
    "less": "css",
    "py": "python",
    "sh": "shell",
    "bash": "shell",
    "zsh": "shell",
    "shellscript": "shell",
    "rb": "ruby",
    "kotlin": "java",
    "kt": "java",
    "swift": "default",
    "jsonc": "default",
}


def get_rule_set(language: Optional[str] = None) -> RuleSet:
    """Resolve a language tag or alias to its rule set.

    RULES:
    - None or "" returns DEFAULT_RULE_SET
    - Lookup is case-insensitive and accepts aliases
    - Unknown tags raise UnknownLanguageError

    Args:
        language: Rule-set tag ("python") or alias ("py").

    Returns:
        The registered RuleSet.
    """
    if not language:
        return DEFAULT_RULE_SET
    tag = language.strip().lower()
    tag = LANGUAGE_ALIASES.get(tag, tag)
    if tag not in RULE_SETS:
        raise UnknownLanguageError(language)
    return RULE_SETS[tag]
