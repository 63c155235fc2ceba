"""Tests for the command-line interface.

WHY: The CLI rewrites user files in place. It must preserve newline style,
skip selections on the last line, keep stdout clean for piping, and fail
with exit code 1 (not a traceback) on bad input.

HOW: main() is called with explicit argv. Files live in tmp_path; stdin is
replaced with monkeypatch; output is read with capsys. --server mode runs
against an httpx.MockTransport injected by patching the client class.

RULES:
- All file I/O uses tmp_path
- Errors are asserted through SystemExit codes and stderr text
"""

import io
import json

import httpx
import pyperclip
import pytest

from context_join import cli
from context_join.cli import build_parser, main
from context_join.client import JoinServiceClient


# ---------------------------------------------------------------------------
# Whole-input mode
# ---------------------------------------------------------------------------


class TestWholeInput:
    """Without --lines every input line is joined and printed."""

    def test_joins_file(self, tmp_path, capsys):
        path = tmp_path / "snippet.js"
        path.write_text("foo(\n  bar)\n", encoding="utf-8")
        main([str(path)])
        assert capsys.readouterr().out == "foo(bar)\n"

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("// a\n// b\n"))
        main(["-"])
        assert capsys.readouterr().out == "// a b\n"

    def test_file_is_not_modified(self, tmp_path, capsys):
        path = tmp_path / "snippet.js"
        path.write_text("a\nb\n", encoding="utf-8")
        main([str(path)])
        assert path.read_text(encoding="utf-8") == "a\nb\n"

    def test_language_flag(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("# a\n# b\n"))
        main(["--language", "python"])
        assert capsys.readouterr().out == "# a b\n"


# ---------------------------------------------------------------------------
# Selection mode
# ---------------------------------------------------------------------------


class TestSelections:
    """--lines joins ranges in place, to stdout, or to the clipboard."""

    def test_in_place(self, tmp_path, capsys):
        path = tmp_path / "data.js"
        path.write_text("x = [\n  1,\n  2\n]\nend\n", encoding="utf-8")
        main([str(path), "--lines", "1-4"])
        assert path.read_text(encoding="utf-8") == "x = [1, 2]\nend\n"
        assert "Joined 1 selection(s)" in capsys.readouterr().err

    def test_crlf_preserved(self, tmp_path):
        path = tmp_path / "win.c"
        path.write_bytes(b"a\r\nb\r\nc\r\n")
        main([str(path), "--lines", "1-2"])
        assert path.read_bytes() == b"a b\r\nc\r\n"

    def test_single_line_joins_with_next(self, tmp_path):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        main([str(path), "--lines", "1"])
        assert path.read_text(encoding="utf-8") == "a b\nc\n"

    def test_multiple_ranges(self, tmp_path):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\nd\ne\n", encoding="utf-8")
        main([str(path), "--lines", "1-2", "--lines", "3-4"])
        assert path.read_text(encoding="utf-8") == "a b\nc d\ne\n"

    def test_stdout_leaves_file_alone(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text("a(\n  b)\nc\n", encoding="utf-8")
        main([str(path), "--lines", "1-2", "--stdout"])
        assert capsys.readouterr().out == "a(b)\nc\n"
        assert path.read_text(encoding="utf-8") == "a(\n  b)\nc\n"

    def test_stream_clipboard(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text('s = "ab\ncd";\nnext\n', encoding="utf-8")
        main([str(path), "--lines", "1-2", "--to-clipboard", "--clipboard", "stream"])
        captured = capsys.readouterr()
        assert captured.out == 's = "abcd";\n'
        assert "Copied 1 joined selection(s)" in captured.err
        assert path.read_text(encoding="utf-8") == 's = "ab\ncd";\nnext\n'

    def test_language_from_extension(self, tmp_path):
        path = tmp_path / "script.py"
        path.write_text("# a\n# b\nx = 1\n", encoding="utf-8")
        main([str(path), "--lines", "1-2"])
        assert path.read_text(encoding="utf-8") == "# a b\nx = 1\n"

    def test_last_line_skipped(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text("a\nb\n", encoding="utf-8")
        main([str(path), "--lines", "2"])
        assert path.read_text(encoding="utf-8") == "a\nb\n"
        assert "Skipped lines 2-2" in capsys.readouterr().err

    def test_range_outside_file_skipped(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        main([str(path), "--lines", "1-2", "--lines", "5-6"])
        assert path.read_text(encoding="utf-8") == "a b\nc\n"
        assert "Skipped lines 5-6" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    """Bad input exits with code 1 and a message on stderr."""

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "missing.js")])
        assert excinfo.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unknown_language(self, tmp_path, capsys):
        path = tmp_path / "f.txt"
        path.write_text("a\nb\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--language", "cobol"])
        assert excinfo.value.code == 1
        assert "Unknown language" in capsys.readouterr().err

    def test_bad_range(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--lines", "x-y"])
        assert excinfo.value.code == 1
        assert "Invalid line range" in capsys.readouterr().err

    def test_system_clipboard_unavailable(self, tmp_path, monkeypatch, capsys):
        def no_mechanism(text):
            raise pyperclip.PyperclipException("no copy/paste mechanism")

        monkeypatch.setattr(pyperclip, "copy", no_mechanism)
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--lines", "1-2", "--to-clipboard"])
        assert excinfo.value.code == 1
        assert "System clipboard unavailable" in capsys.readouterr().err

    def test_server_with_clipboard_rejected(self, tmp_path, capsys):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--lines", "1-2", "--to-clipboard", "--server", "http://svc"])
        assert excinfo.value.code == 1
        assert "--server cannot be combined" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Parser and --server
# ---------------------------------------------------------------------------


class TestParser:
    """build_parser() exposes the documented flags."""

    def test_repeatable_lines(self):
        args = build_parser().parse_args(["f.js", "--lines", "1-2", "--lines", "5"])
        assert args.lines == ["1-2", "5"]

    def test_output_flags_exclusive(self):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["f.js", "--stdout", "--to-clipboard"])
        assert excinfo.value.code == 2

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.file is None
        assert args.lines is None
        assert args.clipboard == "system"
        assert args.serve is False

    def test_serve_starts_service(self, monkeypatch):
        calls = []
        monkeypatch.setattr("context_join.server.app.run_api", lambda: calls.append("run"))
        main(["--serve"])
        assert calls == ["run"]


class TestServerMode:
    """--server routes joins through JoinServiceClient."""

    @pytest.fixture
    def remote(self, monkeypatch):
        seen = []

        def handler(request):
            seen.append(request)
            payload = json.loads(request.content)
            if request.url.path == "/join":
                return httpx.Response(200, json={"result": "|".join(payload["lines"]), "language": "default"})
            return httpx.Response(200, json={"text": "remote\n", "joined": ["remote"], "skipped": []})

        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(
            cli,
            "JoinServiceClient",
            lambda base_url: JoinServiceClient(base_url=base_url, transport=transport),
        )
        return seen

    def test_whole_input_remote(self, remote, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("a\nb\n"))
        main(["--server", "http://svc"])
        assert capsys.readouterr().out == "a|b\n"
        assert remote[0].url.host == "svc"

    def test_selection_remote(self, remote, tmp_path):
        path = tmp_path / "f.js"
        path.write_text("a\nb\nc\n", encoding="utf-8")
        main([str(path), "--lines", "1-2", "--server", "http://svc"])
        assert path.read_text(encoding="utf-8") == "remote\n"
        sent = json.loads(remote[0].content)
        assert sent["selections"] == [{"start_line": 0, "end_line": 1}]
        assert sent["language"] == "js"
