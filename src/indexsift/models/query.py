"""The engine-native search request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompiledQuery(BaseModel):
    """A search request in the engine's query DSL.

    ``body`` has the shape::

        {
            "query": {
                "filtered": {
                    "filter": [...],
                    "query": {"bool": {"must": [...], "should": [], "must_not": []}},
                }
            },
            "sort": [{"field": {"order": "asc"}}, ...],  # only when ordered
        }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: str = Field(description="Target index")
    type: str | None = Field(default=None, description="Document type tag")
    from_: int | None = Field(default=None, alias="from", description="Window offset")
    size: int | None = Field(default=None, description="Window size")
    body: dict[str, Any] = Field(default_factory=dict, description="Query DSL body")

    @property
    def bool_query(self) -> dict[str, Any]:
        return self.body["query"]["filtered"]["query"]["bool"]

    @property
    def filter_clauses(self) -> list[dict[str, Any]]:
        return self.body["query"]["filtered"]["filter"]

    def to_request(self) -> dict[str, Any]:
        """Render the request dict handed to ``SearchTransport.search``.

        ``type``, ``from`` and ``size`` are left out when unset.
        """
        request: dict[str, Any] = {"index": self.index}
        if self.type is not None:
            request["type"] = self.type
        if self.from_ is not None:
            request["from"] = self.from_
        if self.size is not None:
            request["size"] = self.size
        request["body"] = self.body
        return request
