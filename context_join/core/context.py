"""Lexical context classifier: which region is open at the end of a text.

WHY: Joining two lines correctly depends on what the first line leaves open.
If it ends inside a string, the next line's text is literal content and must
be appended untouched; if it ends inside a comment, the next line's comment
marker is redundant. A local scan is enough to tell these apart, without
lexing the whole file.

HOW: A finite-state automaton over the accumulated text. The tokenizer looks
only for the markers that matter in the current state (those the transition
table maps to a different state, plus the escape prefix inside literals), so a
`//` inside a string or a quote inside a comment is plain content. Each
consumed token is fed through TRANSITIONS, an explicit table covering every
(state, token kind) pair.

RULES:
- Initial state is always CODE; every state is a valid end state.
- A literal closes only on the delimiter that opened it, and not when escaped.
- Text ending inside a comment or literal returns that open context; nothing
  is ever reported as "unterminated".
- Classification is a pure function of (text, rule set); no state is kept
  between calls.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from context_join.core.rulesets import DEFAULT_RULE_SET, RuleSet


class ContextKind(enum.Enum):
    """Tag of a JoinContext."""

    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING_LITERAL = "string_literal"


@dataclass(frozen=True)
class JoinContext:
    """The lexical region in effect at the end of some text.

    Attributes:
        kind: Which region is open.
        delimiter: For STRING_LITERAL, the character that opened the literal;
                   None for every other kind.
    """

    kind: ContextKind
    delimiter: Optional[str] = None

    @classmethod
    def code(cls) -> JoinContext:
        return cls(ContextKind.CODE)

    @classmethod
    def line_comment(cls) -> JoinContext:
        return cls(ContextKind.LINE_COMMENT)

    @classmethod
    def block_comment(cls) -> JoinContext:
        return cls(ContextKind.BLOCK_COMMENT)

    @classmethod
    def string_literal(cls, delimiter: str) -> JoinContext:
        return cls(ContextKind.STRING_LITERAL, delimiter)

    def __str__(self) -> str:
        if self.kind is ContextKind.STRING_LITERAL:
            return "{}({})".format(self.kind.value, self.delimiter)
        return self.kind.value


# ---------------------------------------------------------------------------
# Automaton
# ---------------------------------------------------------------------------


class ScanState(enum.Enum):
    CODE = "code"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"
    IN_SINGLE_QUOTE = "in_single_quote"
    IN_DOUBLE_QUOTE = "in_double_quote"
    IN_TEMPLATE_LITERAL = "in_template_literal"


class TokenKind(enum.Enum):
    LINE_COMMENT = "line_comment"
    BLOCK_OPEN = "block_open"
    BLOCK_CLOSE = "block_close"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    BACKTICK = "backtick"
    ESCAPE = "escape"
    OTHER = "other"


_S = ScanState
_T = TokenKind


def _stay(state: ScanState) -> Dict[TokenKind, ScanState]:
    return {kind: state for kind in TokenKind}


def _literal_row(state: ScanState, closer: TokenKind) -> Dict[TokenKind, ScanState]:
    row = _stay(state)
    row[closer] = _S.CODE
    return row


TRANSITIONS: Dict[ScanState, Dict[TokenKind, ScanState]] = {
    _S.CODE: {
        _T.LINE_COMMENT: _S.IN_LINE_COMMENT,
        _T.BLOCK_OPEN: _S.IN_BLOCK_COMMENT,
        _T.BLOCK_CLOSE: _S.CODE,
        _T.SINGLE_QUOTE: _S.IN_SINGLE_QUOTE,
        _T.DOUBLE_QUOTE: _S.IN_DOUBLE_QUOTE,
        _T.BACKTICK: _S.IN_TEMPLATE_LITERAL,
        _T.ESCAPE: _S.CODE,
        _T.OTHER: _S.CODE,
    },
    # A line comment runs to the end of the text.
    _S.IN_LINE_COMMENT: _stay(_S.IN_LINE_COMMENT),
    _S.IN_BLOCK_COMMENT: {
        **_stay(_S.IN_BLOCK_COMMENT),
        _T.BLOCK_CLOSE: _S.CODE,
    },
    _S.IN_SINGLE_QUOTE: _literal_row(_S.IN_SINGLE_QUOTE, _T.SINGLE_QUOTE),
    _S.IN_DOUBLE_QUOTE: _literal_row(_S.IN_DOUBLE_QUOTE, _T.DOUBLE_QUOTE),
    _S.IN_TEMPLATE_LITERAL: _literal_row(_S.IN_TEMPLATE_LITERAL, _T.BACKTICK),
}
"""Next state for every (state, token kind) pair."""

ESCAPING_STATES = frozenset({
    _S.IN_SINGLE_QUOTE,
    _S.IN_DOUBLE_QUOTE,
    _S.IN_TEMPLATE_LITERAL,
})
"""States in which the escape prefix swallows the following character."""

_DELIMITER_TOKENS: Dict[str, TokenKind] = {
    "'": _T.SINGLE_QUOTE,
    '"': _T.DOUBLE_QUOTE,
    "`": _T.BACKTICK,
}


def _markers(rules: RuleSet) -> List[Tuple[str, TokenKind]]:
    """All (marker text, token kind) pairs of a rule set, longest first."""
    markers = [(m, _T.LINE_COMMENT) for m in rules.line_comment_markers if m]
    if rules.block_comment is not None:
        opener, closer = rules.block_comment
        markers.append((opener, _T.BLOCK_OPEN))
        markers.append((closer, _T.BLOCK_CLOSE))
    for delimiter in rules.string_delimiters:
        markers.append((delimiter, _DELIMITER_TOKENS[delimiter]))
    markers.sort(key=lambda pair: len(pair[0]), reverse=True)
    return markers


def _active_markers(
    state: ScanState,
    markers: List[Tuple[str, TokenKind]],
) -> List[Tuple[str, TokenKind]]:
    """Markers that change the given state; the rest are plain content."""
    row = TRANSITIONS[state]
    return [(text, kind) for text, kind in markers if row[kind] is not state]


def tokenize(text: str, rules: RuleSet = DEFAULT_RULE_SET) -> Iterator[Tuple[ScanState, TokenKind, str]]:
    """Yield (state after token, token kind, token text) while scanning text.

    The tokenizer is state-aware: in each state it only recognizes the markers
    that state reacts to. An escape prefix inside a literal is yielded together
    with the character it escapes as a single ESCAPE token.
    """
    markers = _markers(rules)
    active = {state: _active_markers(state, markers) for state in ScanState}
    escape = rules.escape_char

    state = _S.CODE
    pos = 0
    length = len(text)
    while pos < length:
        if escape and state in ESCAPING_STATES and text.startswith(escape, pos):
            end = min(pos + len(escape) + 1, length)
            kind = _T.ESCAPE
        else:
            for marker, marker_kind in active[state]:
                if text.startswith(marker, pos):
                    end = pos + len(marker)
                    kind = marker_kind
                    break
            else:
                end = pos + 1
                kind = _T.OTHER
        state = TRANSITIONS[state][kind]
        yield state, kind, text[pos:end]
        pos = end


def scan_states(text: str, rules: RuleSet = DEFAULT_RULE_SET) -> List[ScanState]:
    """Return the automaton state after each consumed token."""
    return [state for state, _kind, _token in tokenize(text, rules)]


def classify(text: str, rules: RuleSet = DEFAULT_RULE_SET) -> JoinContext:
    """Classify the lexical context in effect at the end of text.

    Args:
        text: Everything accumulated so far (one or more joined lines).
        rules: Marker configuration for the document's language.

    Returns:
        The JoinContext open at the end of text. Unterminated comments and
        literals are reported as open, not as errors.
    """
    state = _S.CODE
    delimiter = None
    for state, kind, token in tokenize(text, rules):
        if kind in (_T.SINGLE_QUOTE, _T.DOUBLE_QUOTE, _T.BACKTICK):
            delimiter = token
    return _to_context(state, delimiter)


def _to_context(state: ScanState, delimiter: Optional[str]) -> JoinContext:
    if state is _S.CODE:
        return JoinContext.code()
    if state is _S.IN_LINE_COMMENT:
        return JoinContext.line_comment()
    if state is _S.IN_BLOCK_COMMENT:
        return JoinContext.block_comment()
    return JoinContext.string_literal(delimiter)
