"""Transport layer — Capabilities that carry requests to the search engine.

Built-in transports:
  - http: ``HttpTransport`` over the engine's REST API (httpx)

Implement ``SearchTransport`` to plug in your own client.
"""

from indexsift.transport.base import SearchTransport
from indexsift.transport.http import HttpTransport

__all__ = ["HttpTransport", "SearchTransport"]
