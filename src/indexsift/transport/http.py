"""HTTP transport — Bulk and search requests over the engine's REST API.

Talks to an Elasticsearch/OpenSearch-compatible node using ``httpx``
(synchronous). No official client library is required.

Usage::

    with HttpTransport("http://localhost:9200") as transport:
        engine = IndexSiftEngine(transport, index="products")
        result = engine.search(SearchRequest(query="red shoes"))
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, cast

import httpx

from indexsift.config.settings import TransportSettings

logger = logging.getLogger(__name__)

_EMPTY_BULK_RESPONSE: dict[str, Any] = {"took": 0, "errors": False, "items": []}


class HttpTransport:
    """``SearchTransport`` over the engine's ``_bulk`` and ``_search`` endpoints.

    Args:
        base_url: Node URL, e.g. ``"http://localhost:9200"``.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: HTTP request timeout in seconds.
        verify_certs: Whether to verify TLS certificates.
        client: Pre-built ``httpx.Client``; when given, the other connection
            arguments are ignored and the client is used as-is.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        verify_certs: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        if client is None:
            auth = None
            if username and password:
                auth = httpx.BasicAuth(username, password)
            client = httpx.Client(
                base_url=self._base_url,
                timeout=httpx.Timeout(timeout),
                auth=auth,
                verify=verify_certs,
            )
        self._client = client

    @classmethod
    def from_settings(cls, settings: TransportSettings) -> HttpTransport:
        """Build a transport for the first configured host."""
        base_url = settings.hosts[0] if settings.hosts else "http://localhost:9200"
        return cls(
            base_url=base_url,
            username=settings.username,
            password=settings.password,
            timeout=settings.timeout,
            verify_certs=settings.verify_certs,
        )

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    # ── Bulk ─────────────────────────────────────────────────────────────

    def bulk(self, request: dict[str, Any]) -> dict[str, Any]:
        """POST the bulk body as NDJSON to ``/_bulk``."""
        lines = request.get("body") or []
        if not lines:
            logger.debug("Empty bulk body, nothing sent")
            return dict(_EMPTY_BULK_RESPONSE)

        payload = "".join(json.dumps(line, default=str) + "\n" for line in lines)
        params = {"refresh": "true"} if request.get("refresh") else {}

        start = time.monotonic()
        resp = self._client.post(
            "/_bulk",
            content=payload.encode("utf-8"),
            params=params,
            headers={"Content-Type": "application/x-ndjson"},
        )
        resp.raise_for_status()
        took_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Bulk request with %d lines completed in %d ms", len(lines), took_ms)
        return cast(dict[str, Any], resp.json())

    # ── Search ───────────────────────────────────────────────────────────

    def search(self, request: dict[str, Any]) -> dict[str, Any]:
        """POST the query body to ``/{index}[/{type}]/_search``."""
        path = "/".join(str(part) for part in (request.get("index"), request.get("type")) if part)
        params = {key: request[key] for key in ("from", "size") if request.get(key) is not None}

        start = time.monotonic()
        resp = self._client.post(f"/{path}/_search", json=request.get("body", {}), params=params)
        resp.raise_for_status()
        took_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Search on /%s completed in %d ms", path, took_ms)
        return cast(dict[str, Any], resp.json())
