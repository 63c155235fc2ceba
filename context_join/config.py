"""Configuration defaults and .env loading.

WHY: The CLI, the HTTP service and the service client share a handful of
settings (default language, bind address, service URL, log level). Keeping
them in one place, overridable from the environment, means an editor plugin
and the service it talks to can be pointed at each other without code edits.

HOW: python-dotenv loads the .env file on import. Each setting is a
module-level constant read with os.getenv() and a default.

RULES:
- All defaults can be overridden via environment variables
- CONTEXT_JOIN_LANGUAGE names a rule set or alias ("default" if unset)
- load_port() raises ValueError for a non-integer port
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

DEFAULT_LANGUAGE = os.getenv("CONTEXT_JOIN_LANGUAGE", "default")
DEFAULT_HOST = os.getenv("CONTEXT_JOIN_HOST", "127.0.0.1")
DEFAULT_SERVER_URL = os.getenv("CONTEXT_JOIN_SERVER_URL", "http://127.0.0.1:8765")
DEFAULT_LOG_LEVEL = os.getenv("CONTEXT_JOIN_LOG_LEVEL", "WARNING").upper()


def load_port() -> int:
    """Return the HTTP service port from CONTEXT_JOIN_PORT (default 8765).

    RULES:
    - Raises ValueError if the variable is set to something non-numeric
    """
    raw = os.getenv("CONTEXT_JOIN_PORT", "8765").strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "CONTEXT_JOIN_PORT must be an integer, got '{}'".format(raw)
        ) from None
