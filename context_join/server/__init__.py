"""HTTP service exposing the joiner.

WHY: Editor plugins that cannot import Python call the joiner over HTTP.

HOW: app.py defines the FastAPI app, models.py the pydantic schemas.
Run with ``context-join-api`` or ``uvicorn context_join.server.app:app``.
"""
