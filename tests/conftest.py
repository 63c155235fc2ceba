"""Shared test fixtures for the context_join test suite.

WHY: Several test modules need the same small documents, rule sets and
clipboard doubles. Centralizing them here keeps the expected line layouts
in one place.

HOW: Pytest fixtures build fresh TextDocument and MemoryClipboard instances
per test, and expose the registered rule sets by name.

RULES:
- Documents are rebuilt for every test (commands mutate them in place)
- Rule sets come from RULE_SETS; tests never mutate them
"""

import pytest

from context_join.adapters.clipboard import MemoryClipboard
from context_join.adapters.document import TextDocument
from context_join.core.rulesets import DEFAULT_RULE_SET, RULE_SETS


# ---------------------------------------------------------------------------
# Sample source
# ---------------------------------------------------------------------------

JS_SOURCE = "\n".join([
    "const url = \"http://",
    "example.com\";",
    "call(",
    "  url,",
    "  options",
    ");",
    "// first half",
    "// second half",
    "done();",
]) + "\n"


@pytest.fixture
def js_document():
    """A nine-line JavaScript document ending with a newline."""
    return TextDocument.from_text(JS_SOURCE)


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def default_rules():
    return DEFAULT_RULE_SET


@pytest.fixture
def python_rules():
    return RULE_SETS["python"]
