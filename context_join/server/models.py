"""Pydantic request/response models for the HTTP API.

WHY: Editor plugins written in other languages call the joiner over HTTP.
The endpoints need typed schemas for request validation, response
serialization, and the OpenAPI documentation those plugin authors read.

HOW: Each endpoint has a request and a response model. All fields carry
Field descriptions for the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- language is optional everywhere; None means the default rule set
- lines must be non-empty (min_length=1), mirroring join_all()'s contract
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class JoinRequest(BaseModel):
    """Lines to fold into one."""

    lines: List[str] = Field(
        min_length=1,
        description="Ordered line texts without line terminators. At least one.",
    )
    language: Optional[str] = Field(
        default=None,
        description="Rule-set tag or alias (e.g. 'python', 'ts'). Defaults to C-family rules.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {"lines": ["// first part", "// second part"], "language": "javascript"}
        ]
    }}


class JoinPairRequest(BaseModel):
    """Two lines to join."""

    first: str = Field(description="Accumulated text (the upper line).")
    second: str = Field(description="The next line.")
    language: Optional[str] = Field(default=None, description="Rule-set tag or alias.")


class ClassifyRequest(BaseModel):
    """Text whose trailing lexical context should be reported."""

    text: str = Field(description="Text to scan from the start.")
    language: Optional[str] = Field(default=None, description="Rule-set tag or alias.")
    trace: bool = Field(
        default=False,
        description="Include the automaton state after each consumed token.",
    )


class SelectionModel(BaseModel):
    """A zero-based, inclusive line range."""

    start_line: int = Field(ge=0, description="First selected line (zero-based).")
    end_line: int = Field(ge=0, description="Last selected line (zero-based, inclusive).")


class DocumentJoinRequest(BaseModel):
    """A whole document plus the selections to join in place."""

    text: str = Field(description="Full document text.")
    selections: List[SelectionModel] = Field(
        min_length=1,
        description="Selections to join. Ones ending on the last line are skipped.",
    )
    language: Optional[str] = Field(default=None, description="Rule-set tag or alias.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class JoinResponse(BaseModel):
    """Result of a join."""

    result: str = Field(description="The joined line.")
    language: str = Field(description="Name of the rule set that was applied.")


class ClassifyResponse(BaseModel):
    """Lexical context at the end of the scanned text."""

    kind: str = Field(description="code, line_comment, block_comment or string_literal.")
    delimiter: Optional[str] = Field(
        default=None,
        description="Opening delimiter, only present for string_literal.",
    )
    states: Optional[List[str]] = Field(
        default=None,
        description="Automaton state after each token, only present when trace was requested.",
    )


class DocumentJoinResponse(BaseModel):
    """The edited document and a report of what happened."""

    text: str = Field(description="Document text after the joins.")
    joined: List[str] = Field(description="Joined line per processed selection, in document order.")
    skipped: List[SelectionModel] = Field(description="Selections left untouched.")


class LanguageInfo(BaseModel):
    """One registered rule set."""

    name: str = Field(description="Rule-set tag.")
    aliases: List[str] = Field(description="Alternative ids resolving to this rule set.")
    line_comment_markers: List[str] = Field(description="Line comment markers, longest first.")
    block_comment: Optional[List[str]] = Field(
        default=None,
        description="Block comment [open, close], absent if the language has none.",
    )
    string_delimiters: List[str] = Field(description="Literal delimiters.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
