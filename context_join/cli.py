"""Command-line interface for context-join.

WHY: Not every editor has a plugin, and shell users want the same joins in
scripts and pipes. The CLI drives the reference adapter over files: join
whole input into one line, or join selected line ranges in place or to the
clipboard.

HOW: Uses argparse. Without --lines, every input line (from FILE or stdin)
is folded into one line and printed. With --lines, the ranges become
selections on a TextDocument and the in-place or clipboard command runs on
it. --server sends the work to a running context-join service instead of
joining locally.

RULES:
- Positional FILE; "-" or no FILE reads stdin
- --lines takes 1-based ranges ("3-5", "7") and may repeat
- --lines on a file rewrites it in place unless --stdout or --to-clipboard
- The language defaults to the file extension's rule set, then to
  CONTEXT_JOIN_LANGUAGE
- Newline style and trailing newline of the file are preserved
- Status output goes to stderr; exit codes: 0 success, 1 error
- --serve starts the HTTP service and ignores the join options
- Python 3.9 compatible (no match/case, no X | Y unions)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from context_join.adapters.clipboard import CLIPBOARDS
from context_join.adapters.commands import CommandResult, join_lines, join_lines_to_clipboard
from context_join.adapters.document import Selection, TextDocument
from context_join.client import JoinServiceClient, JoinServiceError
from context_join.config import DEFAULT_LANGUAGE, DEFAULT_LOG_LEVEL
from context_join.core.joiner import join_all
from context_join.core.rulesets import LANGUAGE_ALIASES, RULE_SETS, get_rule_set

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, DEFAULT_LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _language_for(path: Optional[Path], explicit: Optional[str]) -> str:
    """Pick the language: explicit flag, then file extension, then config."""
    if explicit:
        return explicit
    if path is not None:
        ext = path.suffix.lstrip(".").lower()
        if ext in RULE_SETS or ext in LANGUAGE_ALIASES:
            return ext
    return DEFAULT_LANGUAGE


def _read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    # newline="" keeps \r\n intact so it can be written back unchanged
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_file(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _join_whole_input(text: str, language: str, server: Optional[str]) -> str:
    document = TextDocument.from_text(text)
    if server:
        with JoinServiceClient(base_url=server) as client:
            return client.join_lines(document.lines, language=language)
    return join_all(document.lines, language=language)


def _join_selections(
    args: argparse.Namespace,
    path: Optional[Path],
    text: str,
    language: str,
) -> None:
    selections = [Selection.parse(raw) for raw in args.lines]
    document = TextDocument.from_text(text)

    if args.to_clipboard:
        if args.server:
            raise ValueError("--server cannot be combined with --to-clipboard")
        clipboard = CLIPBOARDS[args.clipboard]()
        result = join_lines_to_clipboard(
            document, selections, clipboard, rules=get_rule_set(language)
        )
        _report(result)
        if result.joined:
            _status("Copied {} joined selection(s) to the {} clipboard".format(
                len(result.joined), clipboard.name
            ))
        return

    if args.server:
        with JoinServiceClient(base_url=args.server) as client:
            body = client.join_document(
                text,
                [{"start_line": s.start_line, "end_line": s.end_line} for s in selections],
                language=language,
            )
        new_text = body["text"]
        result = CommandResult(
            joined=body["joined"],
            skipped=[Selection(s["start_line"], s["end_line"]) for s in body["skipped"]],
        )
    else:
        result = join_lines(document, selections, rules=get_rule_set(language))
        new_text = document.to_text()
    _report(result)

    if args.stdout or path is None:
        sys.stdout.write(new_text)
        sys.stdout.flush()
    else:
        _write_file(path, new_text)
        _status("Joined {} selection(s) in {}".format(len(result.joined), path))


def _report(result: CommandResult) -> None:
    for selection in result.skipped:
        _status("  Skipped lines {}-{} (reaches the last line of the document or overlaps)".format(
            selection.start_line + 1, selection.end_line + 1
        ))


def _run(args: argparse.Namespace) -> None:
    path = None if args.file in (None, "-") else Path(args.file)
    if path is not None and not path.is_file():
        print("Error: File not found: {}".format(path), file=sys.stderr)
        sys.exit(1)

    language = _language_for(path, args.language)

    try:
        # Resolve early so a bad --language fails before any I/O
        get_rule_set(language)
        text = _read_input(path)
        if args.lines:
            _join_selections(args, path, text, language)
        else:
            sys.stdout.write(_join_whole_input(text, language, args.server) + "\n")
            sys.stdout.flush()
    except (ValueError, IndexError, RuntimeError, JoinServiceError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except (OSError, httpx.HTTPError) as e:
        logger.debug("I/O failure", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="context-join",
        description="Join source lines while respecting comments, string literals "
                    "and whitespace at the join point.",
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to read. '-' or omitted reads stdin.",
    )

    parser.add_argument(
        "--lines",
        action="append",
        default=None,
        metavar="RANGE",
        help="1-based line range to join, e.g. '3-5' or '7' (joins 7 and 8). "
             "Can be specified multiple times.",
    )

    parser.add_argument(
        "--language",
        default=None,
        help="Rule set or alias. Available: {}. "
             "Default: from the file extension, else '{}'.".format(
                 ", ".join(sorted(RULE_SETS.keys())), DEFAULT_LANGUAGE
             ),
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--to-clipboard",
        action="store_true",
        help="Write the joined selections to the clipboard instead of editing the file.",
    )
    output.add_argument(
        "--stdout",
        action="store_true",
        help="Print the edited document instead of rewriting the file.",
    )

    parser.add_argument(
        "--clipboard",
        choices=("system", "stream"),
        default="system",
        help="Clipboard backend for --to-clipboard (default: %(default)s).",
    )

    parser.add_argument(
        "--server",
        default=None,
        metavar="URL",
        help="Send joins to a running context-join service at URL.",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP service (host and port from CONTEXT_JOIN_HOST and "
             "CONTEXT_JOIN_PORT) instead of joining.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if args.serve:
        from context_join.server.app import run_api
        run_api()
        return
    _run(args)


if __name__ == "__main__":
    main()
