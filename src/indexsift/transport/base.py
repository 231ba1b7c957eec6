"""Transport interface — The network capability IndexSift sends requests through.

IndexSift only builds requests and reads responses. Anything with ``bulk``
and ``search`` methods taking the request dicts below can carry them: the
bundled ``HttpTransport``, or a thin wrapper around an official client.

Bulk request::

    {"refresh": True, "body": [{"index": {"_index": ..., "_type": ..., "_id": ...}}, {...document...}, ...]}

Search request::

    {"index": ..., "type": ..., "from": ..., "size": ..., "body": {"query": {...}, "sort": [...]}}

Errors raised by a transport reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SearchTransport(Protocol):
    """Sends bulk and search requests to the engine."""

    def bulk(self, request: dict[str, Any]) -> dict[str, Any]:
        """Send a bulk write and return the engine's response."""
        ...

    def search(self, request: dict[str, Any]) -> dict[str, Any]:
        """Send a search and return the engine's response."""
        ...
