"""Search request model."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indexsift.models.filters import FilterValue, FreeText


class SortOrder(BaseModel):
    """One ``(field, direction)`` entry of a sort list."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Field to sort on")
    direction: Literal["asc", "desc"] = Field(default="asc", description="Sort direction")

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class SearchRequest(BaseModel):
    """A caller's search intent, independent of the engine's query DSL.

    ``query`` accepts a plain string or a mapping as well as the typed
    variants; both are normalized into ``TextQuery`` / ``StructuredQuery``.
    ``orders`` accepts ``(field, direction)`` tuples.

    Examples:
        Free text with filters::

            SearchRequest(query="red shoes", filters={"size": 42, "brand": "Acme"})

        Structured with geo::

            SearchRequest(query={"geo_distance": {"lat": 48.85, "lng": 2.35}, "limit": 20})
    """

    model_config = ConfigDict(frozen=True)

    query: FreeText = Field(default=None, description="Free text: absent, text or structured")
    filters: dict[str, FilterValue] = Field(default_factory=dict, description="Field → scalar constraints, in order")
    raw_fragments: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Engine-native fragments merged into the bool query last; colliding keys are replaced",
    )
    orders: list[SortOrder] = Field(default_factory=list, description="Sort list, in priority order")
    limit: int | None = Field(default=None, ge=0, description="Window size")
    offset: int | None = Field(default=None, ge=0, description="Window offset")
    collection_type: str | None = Field(default=None, description="Type tag of the searched records")
    with_trashed: bool | None = Field(
        default=None,
        description="Include soft-deleted records when hydrating; None defers to the engine default",
    )
    response_callback: Callable[..., Any] | None = Field(
        default=None,
        description="Called as callback(transport, compiled_query) in place of the default search call",
    )

    @field_validator("query", mode="before")
    @classmethod
    def _coerce_query(cls, v: Any) -> Any:
        """Wrap plain strings and untagged mappings in their tagged variant."""
        if isinstance(v, str):
            return {"kind": "text", "text": v}
        if isinstance(v, Mapping) and "kind" not in v:
            return {"kind": "structured", **v}
        return v

    @field_validator("orders", mode="before")
    @classmethod
    def _coerce_orders(cls, v: Any) -> Any:
        if isinstance(v, list | tuple):
            return [
                {"field": o[0], "direction": o[1] if len(o) > 1 else "asc"} if isinstance(o, list | tuple) else o
                for o in v
            ]
        return v

    # ── Builders ─────────────────────────────────────────────────────────

    def where(self, field: str, value: FilterValue) -> SearchRequest:
        """Return a copy with one more filter."""
        return self._replace(filters={**self.filters, field: value})

    def order_by(self, field: str, direction: Literal["asc", "desc"] = "asc") -> SearchRequest:
        """Return a copy with one more sort entry."""
        return self._replace(orders=[*self.orders, SortOrder(field=field, direction=direction)])

    def with_trashed_visible(self, value: bool = True) -> SearchRequest:
        """Return a copy whose hydration includes (or excludes) soft-deleted records."""
        return self._replace(with_trashed=value)

    def _replace(self, **changes: Any) -> SearchRequest:
        """Copy with ``changes`` applied, validated like a freshly built request."""
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        return type(self).model_validate({**fields, **changes})
