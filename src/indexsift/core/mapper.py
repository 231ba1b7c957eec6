"""Result mapper — Reads engine responses back into ids, totals and records.

``parse``, ``ids_of`` and ``total_count`` are pure. ``hydrate`` performs a
single batch fetch through the supplied ``RecordFetcher`` and returns the
records in engine order, dropping identifiers the fetch no longer resolves.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from indexsift.exceptions import InvalidPaginationError, MalformedResponseError
from indexsift.models.record import RecordFetcher, SearchableRecord
from indexsift.models.result import Hit, SearchResult

logger = logging.getLogger(__name__)


def check_page_window(per_page: int, page: int) -> None:
    """Reject page sizes and numbers that cannot describe a window.

    Raises:
        InvalidPaginationError: If ``per_page < 1`` or ``page < 1``.
    """
    if per_page < 1:
        raise InvalidPaginationError(f"per_page must be a positive integer, got {per_page}")
    if page < 1:
        raise InvalidPaginationError(f"page must be a positive integer, got {page}")


class ResultMapper:
    """Maps raw engine responses to ``SearchResult`` and application records."""

    def parse(self, response: Any, *, trashed_visible: bool | None = None) -> SearchResult:
        """Parse a raw search response.

        Accepts both total formats: a plain integer, or the
        ``{"value": n, "relation": ...}`` object of newer engines.

        Args:
            response: The engine response.
            trashed_visible: Hydration visibility to stamp on the result.

        Returns:
            The parsed result.

        Raises:
            MalformedResponseError: If the ``hits`` structure is missing or malformed.
        """
        if not isinstance(response, Mapping):
            raise MalformedResponseError(f"Expected a mapping response, got {type(response).__name__}")

        hits = response.get("hits")
        if not isinstance(hits, Mapping):
            raise MalformedResponseError("Response has no 'hits' object")
        if "hits" not in hits or "total" not in hits:
            raise MalformedResponseError("Response 'hits' object lacks 'hits' or 'total'")

        entries = hits["hits"]
        if not isinstance(entries, list):
            raise MalformedResponseError(f"'hits.hits' must be a list, got {type(entries).__name__}")

        total = hits["total"]
        if isinstance(total, Mapping):
            total = total.get("value")
        if isinstance(total, bool) or not isinstance(total, int):
            raise MalformedResponseError(f"'hits.total' must be an integer, got {total!r}")
        if total < 0:
            raise MalformedResponseError(f"'hits.total' must not be negative, got {total}")

        parsed: list[Hit] = []
        for entry in entries:
            if not isinstance(entry, Mapping) or "_id" not in entry:
                raise MalformedResponseError("Hit without '_id'")
            source = entry.get("_source") or {}
            if not isinstance(source, Mapping):
                raise MalformedResponseError(f"Hit '{entry['_id']}' has a non-object '_source'")
            parsed.append(Hit(id=str(entry["_id"]), source=dict(source)))

        return SearchResult(
            hits=parsed,
            total_hits=total,
            trashed_visible=trashed_visible,
            raw=dict(response),
        )

    def coerce(self, result: SearchResult | Mapping[str, Any]) -> SearchResult:
        """Accept a parsed result or a raw response."""
        if isinstance(result, SearchResult):
            return result
        return self.parse(result)

    def ids_of(self, result: SearchResult | Mapping[str, Any]) -> list[str]:
        """Hit identifiers, in response order."""
        return self.coerce(result).ids

    def total_count(self, result: SearchResult | Mapping[str, Any]) -> int:
        """Total number of matches reported by the engine."""
        return self.coerce(result).total_hits

    def hydrate(
        self,
        result: SearchResult | Mapping[str, Any],
        fetcher: RecordFetcher,
        trashed_visible: bool = False,
    ) -> list[SearchableRecord]:
        """Resolve hits to records, keeping the engine's order.

        Args:
            result: Parsed result or raw response.
            fetcher: Batch record loader.
            trashed_visible: Whether soft-deleted records may be returned.

        Returns:
            Records in hit order. Hits whose id the fetch did not return
            are left out.
        """
        parsed = self.coerce(result)
        if not parsed.hits:
            return []

        ids = parsed.ids
        records = {str(record.identifier()): record for record in fetcher(ids, with_trashed=trashed_visible)}
        hydrated = [records[hit_id] for hit_id in ids if hit_id in records]

        dropped = len(ids) - len(hydrated)
        if dropped:
            logger.debug("Dropped %d stale hits that no longer resolve to records", dropped)
        return hydrated

    def paginate(self, result: SearchResult, per_page: int, page: int) -> SearchResult:
        """Attach page metadata to a result.

        Raises:
            InvalidPaginationError: If ``per_page`` or ``page`` is not positive.
        """
        check_page_window(per_page, page)
        return result.model_copy(
            update={
                "page_count": math.ceil(result.total_hits / per_page),
                "per_page": per_page,
                "page": page,
            }
        )
