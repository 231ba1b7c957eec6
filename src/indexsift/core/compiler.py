"""Query compiler — Turns a ``SearchRequest`` into the engine's query DSL.

Clause placement:

- ``must`` (scoring): match-all, the free-text match, structured field
  matches, and ``operator: and`` matches for string filters.
- ``filter`` (non-scoring): the geo-distance clause, then ``term`` clauses
  for numeric filters.

Raw fragments are merged into the ``bool`` object after everything else,
key by key. A fragment carrying its own ``must`` replaces the compiled
``must`` list.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from indexsift.config.settings import QuerySettings
from indexsift.models.filters import GeoDistance, StructuredQuery, TextQuery
from indexsift.models.query import CompiledQuery
from indexsift.models.request import SearchRequest

logger = logging.getLogger(__name__)


class QueryCompiler:
    """Compiles search requests into ``CompiledQuery`` objects.

    Args:
        settings: Query defaults (window size, fuzziness, geo defaults).
    """

    def __init__(self, settings: QuerySettings | None = None) -> None:
        self.settings = settings or QuerySettings()

    def compile(
        self,
        request: SearchRequest,
        index: str,
        collection_type: str | None = None,
        *,
        size: int | None = None,
        from_: int | None = None,
    ) -> CompiledQuery:
        """Compile a request for one index.

        ``size`` and ``from_`` come from the calling search mode (plain limit,
        or page window) and overwrite any window set inside a structured
        query. When no size results from either, the configured default
        applies.

        Args:
            request: The search request.
            index: Target index.
            collection_type: Type tag; falls back to ``request.collection_type``.
            size: Window size option.
            from_: Window offset option.

        Returns:
            The compiled query.
        """
        must: list[dict[str, Any]] = []
        filters: list[dict[str, Any]] = []
        window: dict[str, int] = {}

        query = request.query
        if query is None or query.is_empty:
            must.append({"match_all": {}})
        elif isinstance(query, TextQuery):
            must.append(self._text_clause(query))
        elif isinstance(query, StructuredQuery):
            self._apply_structured(query, must, filters, window)

        self._apply_filters(request.filters, must, filters)

        bool_query: dict[str, Any] = {"must": must, "should": [], "must_not": []}
        for fragment in request.raw_fragments:
            overridden = sorted(set(fragment) & set(bool_query))
            if overridden:
                logger.debug("Raw fragment replaces bool keys: %s", ", ".join(overridden))
            bool_query.update(copy.deepcopy(fragment))

        body: dict[str, Any] = {
            "query": {
                "filtered": {
                    "filter": filters,
                    "query": {"bool": bool_query},
                },
            },
        }

        if request.orders:
            body["sort"] = [{order.field: {"order": order.direction}} for order in request.orders]

        if size is not None:
            window["size"] = size
        if from_ is not None:
            window["from"] = from_
        window.setdefault("size", self.settings.default_size)

        compiled = CompiledQuery(
            index=index,
            type=collection_type or request.collection_type,
            size=window["size"],
            from_=window.get("from"),
            body=body,
        )
        logger.debug(
            "Compiled query for %s: %d must, %d filter clauses, size=%s from=%s",
            index,
            len(must),
            len(filters),
            compiled.size,
            compiled.from_,
        )
        return compiled

    # ── Clause builders ──────────────────────────────────────────────────

    def _text_clause(self, query: TextQuery) -> dict[str, Any]:
        return {
            "match": {
                self.settings.all_field: {
                    "query": query.text,
                    "fuzziness": self.settings.fuzziness,
                }
            }
        }

    def _apply_structured(
        self,
        query: StructuredQuery,
        must: list[dict[str, Any]],
        filters: list[dict[str, Any]],
        window: dict[str, int],
    ) -> None:
        if query.geo_distance is not None:
            filters.append(self._geo_clause(query.geo_distance))

        if query.skip:
            window["from"] = query.skip
        if query.limit:
            window["size"] = query.limit

        for field, value in query.match.items():
            must.append({"match": {field: {"query": value}}})

    def _geo_clause(self, geo: GeoDistance) -> dict[str, Any]:
        attribute = geo.attribute or self.settings.geo_attribute
        return {
            "geo_distance": {
                "distance": geo.distance or self.settings.geo_distance,
                "distance_type": self.settings.geo_distance_type,
                attribute: {
                    "lon": geo.lng,
                    "lat": geo.lat,
                },
            }
        }

    @staticmethod
    def _apply_filters(
        values: dict[str, Any],
        must: list[dict[str, Any]],
        filters: list[dict[str, Any]],
    ) -> None:
        for field, value in values.items():
            if isinstance(value, bool) or value is None:
                logger.debug("Ignoring filter %s with non-numeric, non-string value %r", field, value)
            elif isinstance(value, int | float):
                filters.append({"term": {field: value}})
            elif isinstance(value, str):
                must.append({"match": {field: {"query": value, "operator": "and"}}})
            else:
                logger.debug("Ignoring filter %s with unsupported value type %s", field, type(value).__name__)
