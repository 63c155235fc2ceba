"""Package entry point for ``python -m context_join``.

WHY: Users run the joiner as ``python -m context_join file.py --lines 3-5``
for CLI mode, or ``python -m context_join --serve`` to start the HTTP
service for editor plugins.

HOW: Delegates to the CLI's main(), which handles both modes.
"""

from context_join.cli import main

if __name__ == "__main__":
    main()
