"""HTTP client for a running context-join service.

WHY: The CLI can hand its joins to a shared service (the same one editor
plugins use) so every tool applies one configuration. Tests and scripts
also need a typed way to talk to the service without hand-building
requests.

HOW: Wraps httpx.Client. JoinServiceClient is a context manager: enter it to
open a connection pool, exit to close it. Each endpoint is one method that
returns plain Python values.

RULES:
- Use as: with JoinServiceClient() as client: ...
- base_url defaults to DEFAULT_SERVER_URL from config
- Non-2xx responses raise JoinServiceError with the server's detail message
- A custom httpx transport can be injected (tests use httpx.MockTransport)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from context_join.config import DEFAULT_SERVER_URL


class JoinServiceError(Exception):
    """Raised when the service returns an error response.

    RULES:
    - Always include status_code and message
    - message is the server's "detail" field, or the raw body
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"context-join service error {status_code}: {message}")


class JoinServiceClient:
    """Synchronous client for the context-join HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or DEFAULT_SERVER_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> JoinServiceClient:
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "JoinServiceClient must be used as a context manager: "
                "with JoinServiceClient() as client: ..."
            )
        return self._client

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        client = self._ensure_client()
        resp = client.request(method, path, json=payload)
        if resp.status_code >= 400:
            try:
                body = resp.json()
                detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            except ValueError:
                detail = resp.text
            raise JoinServiceError(resp.status_code, str(detail))
        return resp.json()

    def join_lines(self, lines: List[str], language: Optional[str] = None) -> str:
        """Join lines via POST /join and return the joined line."""
        body = self._request("POST", "/join", {"lines": list(lines), "language": language})
        return body["result"]

    def join_pair(self, first: str, second: str, language: Optional[str] = None) -> str:
        """Join two lines via POST /join/pair."""
        body = self._request(
            "POST",
            "/join/pair",
            {"first": first, "second": second, "language": language},
        )
        return body["result"]

    def join_document(
        self,
        text: str,
        selections: List[Dict[str, int]],
        language: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run the in-place join on a whole document via POST /documents/join.

        Args:
            text: Full document text.
            selections: Dicts with zero-based "start_line" and "end_line".
            language: Rule-set tag or alias.

        Returns:
            The response body: {"text", "joined", "skipped"}.
        """
        return self._request(
            "POST",
            "/documents/join",
            {"text": text, "selections": selections, "language": language},
        )

    def classify(self, text: str, language: Optional[str] = None) -> Dict[str, Any]:
        """Return the /classify response body ({"kind", "delimiter", ...})."""
        return self._request("POST", "/classify", {"text": text, "language": language})

    def languages(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/languages")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
