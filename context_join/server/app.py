"""FastAPI application exposing the joiner to editor plugins.

WHY: Editor integrations are written in whatever language the editor
speaks. Rather than port the classifier to each of them, a plugin can send
its selected lines to a local HTTP service and write back the result.

HOW: A single FastAPI app with endpoints grouped by tags: joining (lines,
pair, whole document with selections), classification, language listing and
health. Every request resolves its rule set once and calls the core.

RULES:
- All endpoints have OpenAPI descriptions on every response
- Error responses use a consistent ErrorResponse schema
- Unknown language tags return 400; invalid selections return 422
- The service keeps no state between requests
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException

from context_join import __version__
from context_join.adapters.commands import join_lines
from context_join.adapters.document import Selection, TextDocument
from context_join.config import DEFAULT_HOST, load_port
from context_join.core.context import classify, scan_states
from context_join.core.joiner import join_all, join_pair
from context_join.core.rulesets import (
    LANGUAGE_ALIASES,
    RULE_SETS,
    RuleSet,
    UnknownLanguageError,
    get_rule_set,
)
from context_join.server.models import (
    ClassifyRequest,
    ClassifyResponse,
    DocumentJoinRequest,
    DocumentJoinResponse,
    ErrorResponse,
    HealthResponse,
    JoinPairRequest,
    JoinRequest,
    JoinResponse,
    LanguageInfo,
    SelectionModel,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="context-join API",
    description=(
        "Joins adjacent source lines while respecting comments, string "
        "literals and whitespace at the join point. Editor plugins send the "
        "selected lines and receive the joined line."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_language(language: Optional[str]) -> RuleSet:
    """Raise HTTPException(400) if the language has no rule set."""
    try:
        return get_rule_set(language)
    except UnknownLanguageError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints: Join
# ---------------------------------------------------------------------------


@app.post(
    "/join",
    response_model=JoinResponse,
    tags=["join"],
    summary="Join a sequence of lines",
    description=(
        "Folds the lines into one, strictly left to right. A single line is "
        "returned unchanged."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown language"},
        422: {"description": "Empty or malformed line list"},
    },
)
async def join_lines_endpoint(request: JoinRequest) -> JoinResponse:
    rules = _resolve_language(request.language)
    result = join_all(request.lines, rules=rules)
    return JoinResponse(result=result, language=rules.name)


@app.post(
    "/join/pair",
    response_model=JoinResponse,
    tags=["join"],
    summary="Join two lines",
    description="Joins the second line onto the first according to the context the first leaves open.",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown language"},
    },
)
async def join_pair_endpoint(request: JoinPairRequest) -> JoinResponse:
    rules = _resolve_language(request.language)
    result = join_pair(request.first, request.second, rules=rules)
    return JoinResponse(result=result, language=rules.name)


@app.post(
    "/documents/join",
    response_model=DocumentJoinResponse,
    tags=["join"],
    summary="Join selections inside a document",
    description=(
        "Runs the in-place join command on the document text. Selections "
        "ending on the document's last line are skipped and reported."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown language"},
        422: {"model": ErrorResponse, "description": "Selection invalid or outside the document"},
    },
)
async def join_document_endpoint(request: DocumentJoinRequest) -> DocumentJoinResponse:
    rules = _resolve_language(request.language)
    document = TextDocument.from_text(request.text)
    try:
        selections = [Selection(s.start_line, s.end_line) for s in request.selections]
        outcome = join_lines(document, selections, rules=rules)
    except (ValueError, IndexError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return DocumentJoinResponse(
        text=document.to_text(),
        joined=outcome.joined,
        skipped=[
            SelectionModel(start_line=s.start_line, end_line=s.end_line)
            for s in outcome.skipped
        ],
    )


# ---------------------------------------------------------------------------
# Endpoints: Classify
# ---------------------------------------------------------------------------


@app.post(
    "/classify",
    response_model=ClassifyResponse,
    tags=["classify"],
    summary="Report the lexical context at the end of a text",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown language"},
    },
)
async def classify_endpoint(request: ClassifyRequest) -> ClassifyResponse:
    rules = _resolve_language(request.language)
    context = classify(request.text, rules)
    states = None  # type: Optional[List[str]]
    if request.trace:
        states = [state.value for state in scan_states(request.text, rules)]
    return ClassifyResponse(
        kind=context.kind.value,
        delimiter=context.delimiter,
        states=states,
    )


# ---------------------------------------------------------------------------
# Endpoints: Languages
# ---------------------------------------------------------------------------


@app.get(
    "/languages",
    response_model=List[LanguageInfo],
    tags=["languages"],
    summary="List available rule sets",
    description="Returns every rule set with its aliases and marker vocabulary.",
)
async def list_languages() -> List[LanguageInfo]:
    result = []
    for name, rules in sorted(RULE_SETS.items()):
        aliases = sorted(alias for alias, tag in LANGUAGE_ALIASES.items() if tag == name)
        result.append(LanguageInfo(
            name=name,
            aliases=aliases,
            line_comment_markers=list(rules.line_comment_markers),
            block_comment=list(rules.block_comment) if rules.block_comment else None,
            string_delimiters=list(rules.string_delimiters),
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for editor plugins before they send requests.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the context-join-api console script."""
    import uvicorn

    host = DEFAULT_HOST
    port = load_port()
    logger.info("Starting context-join API on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)
