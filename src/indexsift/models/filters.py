"""Filter model — Typed forms of a search's free-text and structured constraints.

A search's free text is one of three shapes:

- absent (``None``): match every document;
- ``TextQuery``: a plain full-text term;
- ``StructuredQuery``: an object carrying window overrides, named-field
  matches and an optional geo-distance constraint.

The compiler dispatches on the variant, never on raw value types.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

FilterValue = StrictStr | StrictInt | StrictFloat | StrictBool | None
"""Scalar accepted as a filter value. Strict types keep ``"30"`` and ``30`` distinct."""


class GeoDistance(BaseModel):
    """A radius constraint around a point.

    ``attribute`` and ``distance`` fall back to the compiler's configured
    defaults (``location`` and ``3km``) when left unset.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    attribute: str | None = Field(default=None, description="Geo-point field to measure from")
    distance: str | None = Field(default=None, description="Radius, e.g. '3km' or '500m'")
    lat: float | None = Field(default=None, description="Latitude of the centre point")
    lng: float | None = Field(default=None, description="Longitude of the centre point")


class TextQuery(BaseModel):
    """Unstructured full-text search term."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.text


class StructuredQuery(BaseModel):
    """Structured search object with secondary hints.

    Field/value pairs to match go under ``match``; any other key is rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["structured"] = "structured"
    skip: int | None = Field(default=None, ge=0, description="Window offset override")
    limit: int | None = Field(default=None, ge=0, description="Window size override")
    match: dict[str, Any] = Field(default_factory=dict, description="Named field/value pairs to match")
    geo_distance: GeoDistance | None = Field(default=None, description="Optional geo-distance filter")

    @property
    def is_empty(self) -> bool:
        return not (self.skip or self.limit or self.match or self.geo_distance)


FreeText = Annotated[TextQuery | StructuredQuery, Field(discriminator="kind")] | None
