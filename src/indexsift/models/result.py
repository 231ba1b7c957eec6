"""Search result models — The engine's response, reduced to hits and totals."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Hit(BaseModel):
    """One matching document, as returned by the engine."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Document identifier (``_id``)")
    source: dict[str, Any] = Field(default_factory=dict, description="Stored document (``_source``)")


class SearchResult(BaseModel):
    """Hits in engine order plus the total-hit count.

    ``page_count``, ``per_page`` and ``page`` are set only by paginated
    searches. ``page_count`` is derived from ``total_hits``, so it is only as
    precise as the engine's total (engines that cap total-hit tracking report
    a lower bound).
    """

    model_config = ConfigDict(frozen=True)

    hits: list[Hit] = Field(default_factory=list, description="Matching documents, in response order")
    total_hits: int = Field(default=0, ge=0, description="Total number of matching documents")
    page_count: int | None = Field(default=None, description="ceil(total_hits / per_page)")
    per_page: int | None = Field(default=None, description="Page size of a paginated search")
    page: int | None = Field(default=None, description="1-based page number of a paginated search")
    trashed_visible: bool | None = Field(
        default=None,
        description="Hydration visibility requested by the originating search",
    )
    raw: dict[str, Any] = Field(default_factory=dict, description="Unmodified engine response", repr=False)

    @property
    def ids(self) -> list[str]:
        return [hit.id for hit in self.hits]

    def __len__(self) -> int:
        return len(self.hits)
