"""IndexSift Engine — Public entry point for indexing and searching.

The engine composes the translation steps around a caller-supplied
transport:

  records  → [BulkOperationBuilder] → transport.bulk
  request  → [QueryCompiler] → transport.search → [ResultMapper] → SearchResult
  result   → [ResultMapper + RecordFetcher] → records

Every call is synchronous: one compile, one transport call, one mapping
step. Transport errors propagate unchanged; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from indexsift.config.settings import QuerySettings, Settings
from indexsift.core.bulk import BulkOperationBuilder
from indexsift.core.compiler import QueryCompiler
from indexsift.core.mapper import ResultMapper, check_page_window
from indexsift.exceptions import ConfigurationError
from indexsift.models.query import CompiledQuery
from indexsift.models.request import SearchRequest
from indexsift.models.result import SearchResult

if TYPE_CHECKING:
    from indexsift.models.record import RecordFetcher, SearchableRecord
    from indexsift.transport.base import SearchTransport

logger = logging.getLogger(__name__)


class IndexSiftEngine:
    """Indexes records into, and searches, one engine index.

    The only state that outlives a call is the trashed-visibility default
    set by ``with_trashed_visible``. It is instance-wide and not safe to
    toggle while other threads search through the same engine; callers
    needing per-call visibility set ``SearchRequest.with_trashed`` (or pass
    ``trashed_visible`` to ``hydrate``) instead.

    Attributes:
        transport: Sends bulk and search requests.
        index: Target index name.
        fetcher: Default record loader used by ``hydrate``.
        settings: Configuration, or None for built-in query defaults.
    """

    def __init__(
        self,
        transport: SearchTransport,
        index: str,
        *,
        fetcher: RecordFetcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.transport = transport
        self.index = index
        self.fetcher = fetcher
        self.settings = settings
        self.compiler = QueryCompiler(settings.query if settings is not None else QuerySettings())
        self.bulk_builder = BulkOperationBuilder(index)
        self.mapper = ResultMapper()
        self._trashed_visible = False

    @classmethod
    def from_settings(cls, settings: Settings, *, fetcher: RecordFetcher | None = None) -> IndexSiftEngine:
        """Create an engine backed by ``HttpTransport`` from configuration."""
        from indexsift.transport.http import HttpTransport

        transport = HttpTransport.from_settings(settings.transport)
        return cls(transport, settings.transport.index, fetcher=fetcher, settings=settings)

    # ──────────────────────────────────────────────────────────────────────
    # Writes
    # ──────────────────────────────────────────────────────────────────────

    def index_batch(self, records: Iterable[SearchableRecord]) -> dict[str, Any]:
        """Index (or re-index) a batch of records.

        Returns:
            The engine's bulk response, uninspected.
        """
        operation = self.bulk_builder.build_index_batch(records)
        logger.info("Indexing %d documents into %s", len(operation), self.index)
        return self.transport.bulk(operation.to_request())

    def delete_batch(self, records: Iterable[SearchableRecord]) -> dict[str, Any]:
        """Remove a batch of records from the index.

        Returns:
            The engine's bulk response, uninspected.
        """
        operation = self.bulk_builder.build_delete_batch(records)
        logger.info("Deleting %d documents from %s", len(operation), self.index)
        return self.transport.bulk(operation.to_request())

    # ──────────────────────────────────────────────────────────────────────
    # Searches
    # ──────────────────────────────────────────────────────────────────────

    def with_trashed_visible(self, value: bool = True) -> IndexSiftEngine:
        """Set the default hydration visibility of soft-deleted records."""
        self._trashed_visible = value
        return self

    @property
    def trashed_visible(self) -> bool:
        return self._trashed_visible

    def search(self, request: SearchRequest) -> SearchResult | Any:
        """Run a search.

        The window is ``request.limit`` / ``request.offset`` when set, else
        the structured query's ``limit`` / ``skip``, else the configured
        default size.

        Returns:
            A ``SearchResult``, or whatever ``request.response_callback``
            returns when the request carries one.
        """
        compiled = self.compiler.compile(
            request,
            self.index,
            request.collection_type,
            size=request.limit,
            from_=request.offset,
        )
        return self._perform(request, compiled)

    def paginated_search(self, request: SearchRequest, per_page: int, page: int) -> SearchResult | Any:
        """Run a search for one page of results.

        Args:
            request: The search request.
            per_page: Page size; must be positive.
            page: 1-based page number; must be positive.

        Returns:
            A ``SearchResult`` carrying ``page_count``, or the callback's
            return value (without page metadata) when the request has one.

        Raises:
            InvalidPaginationError: Before any transport call, on a
                non-positive ``per_page`` or ``page``.
        """
        check_page_window(per_page, page)
        compiled = self.compiler.compile(
            request,
            self.index,
            request.collection_type,
            size=per_page,
            from_=(page - 1) * per_page,
        )
        result = self._perform(request, compiled)
        if not isinstance(result, SearchResult):
            return result
        return self.mapper.paginate(result, per_page, page)

    def _perform(self, request: SearchRequest, compiled: CompiledQuery) -> SearchResult | Any:
        if request.response_callback is not None:
            logger.debug("Handing compiled query for %s to response callback", self.index)
            return request.response_callback(self.transport, compiled)

        response = self.transport.search(compiled.to_request())
        result = self.mapper.parse(response, trashed_visible=request.with_trashed)
        logger.info("Search on %s matched %d documents (%d returned)", self.index, result.total_hits, len(result))
        return result

    # ──────────────────────────────────────────────────────────────────────
    # Result mapping
    # ──────────────────────────────────────────────────────────────────────

    def ids_of(self, result: SearchResult | Mapping[str, Any]) -> list[str]:
        """Hit identifiers, in engine order."""
        return self.mapper.ids_of(result)

    def total_count(self, result: SearchResult | Mapping[str, Any]) -> int:
        """Total number of matches reported by the engine."""
        return self.mapper.total_count(result)

    def hydrate(
        self,
        result: SearchResult | Mapping[str, Any],
        *,
        fetcher: RecordFetcher | None = None,
        trashed_visible: bool | None = None,
    ) -> list[SearchableRecord]:
        """Load the records behind a result, in engine order.

        Visibility of soft-deleted records is the first of: the
        ``trashed_visible`` argument, the originating request's
        ``with_trashed``, the engine default.

        Raises:
            ConfigurationError: If no fetcher is passed or configured.
        """
        fetcher = fetcher or self.fetcher
        if fetcher is None:
            raise ConfigurationError("hydrate() needs a record fetcher; pass one or configure IndexSiftEngine(fetcher=...)")

        parsed = self.mapper.coerce(result)
        if trashed_visible is None:
            trashed_visible = parsed.trashed_visible
        if trashed_visible is None:
            trashed_visible = self._trashed_visible

        return self.mapper.hydrate(parsed, fetcher, trashed_visible)
