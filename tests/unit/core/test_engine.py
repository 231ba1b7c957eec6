"""Tests for the IndexSift engine facade."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from indexsift.config.settings import Settings
from indexsift.core.engine import IndexSiftEngine
from indexsift.exceptions import ConfigurationError, InvalidPaginationError
from indexsift.models.query import CompiledQuery
from indexsift.models.request import SearchRequest
from indexsift.models.result import SearchResult
from indexsift.transport.http import HttpTransport

# ══════════════════════════════════════════════════════════════════════════════
# Writes
# ══════════════════════════════════════════════════════════════════════════════


class TestWrites:
    def test_index_batch_sends_bulk(self, engine: IndexSiftEngine, transport: MagicMock, products: list) -> None:
        response = engine.index_batch(products[:1])
        transport.bulk.assert_called_once_with(
            {
                "refresh": True,
                "body": [
                    {"index": {"_index": "catalog", "_type": "products", "_id": 1}},
                    {"id": 1, "name": "Desk lamp", "price": 25.0},
                ],
            }
        )
        assert response == transport.bulk.return_value

    def test_delete_batch_sends_bulk(self, engine: IndexSiftEngine, transport: MagicMock, products: list) -> None:
        engine.delete_batch(products[:2])
        request = transport.bulk.call_args.args[0]
        assert [list(line) for line in request["body"]] == [["delete"], ["delete"]]

    def test_empty_batch_still_sent(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.index_batch([])
        transport.bulk.assert_called_once_with({"refresh": True, "body": []})

    def test_transport_errors_propagate(self, engine: IndexSiftEngine, transport: MagicMock, products: list) -> None:
        transport.bulk.side_effect = RuntimeError("node down")
        with pytest.raises(RuntimeError, match="node down"):
            engine.index_batch(products)
        assert transport.bulk.call_count == 1


# ══════════════════════════════════════════════════════════════════════════════
# Searches
# ══════════════════════════════════════════════════════════════════════════════


class TestSearch:
    def test_returns_parsed_result(self, engine: IndexSiftEngine) -> None:
        result = engine.search(SearchRequest(query="desk"))
        assert isinstance(result, SearchResult)
        assert result.ids == ["3", "1", "2"]
        assert result.page_count is None

    def test_sends_compiled_query(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.search(SearchRequest(query="desk", collection_type="products", limit=5, offset=10))
        request = transport.search.call_args.args[0]
        assert request["index"] == "catalog"
        assert request["type"] == "products"
        assert (request["size"], request["from"]) == (5, 10)

    def test_default_size_without_limit(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.search(SearchRequest())
        assert transport.search.call_args.args[0]["size"] == 10000

    def test_structured_limit_used_without_request_limit(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.search(SearchRequest(query={"limit": 25}))
        assert transport.search.call_args.args[0]["size"] == 25

    def test_request_limit_overrides_structured_limit(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.search(SearchRequest(query={"limit": 25}, limit=3))
        assert transport.search.call_args.args[0]["size"] == 3

    def test_transport_errors_propagate(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        transport.search.side_effect = ConnectionRefusedError("refused")
        with pytest.raises(ConnectionRefusedError):
            engine.search(SearchRequest())
        assert transport.search.call_count == 1

    def test_callback_bypasses_default_search(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        seen: dict = {}

        def callback(client, compiled: CompiledQuery) -> str:
            seen["client"] = client
            seen["compiled"] = compiled
            return "custom"

        assert engine.search(SearchRequest(query="desk", response_callback=callback)) == "custom"
        transport.search.assert_not_called()
        assert seen["client"] is transport
        assert seen["compiled"].index == "catalog"


class TestPaginatedSearch:
    def test_page_window(self, engine: IndexSiftEngine, transport: MagicMock, make_response) -> None:
        transport.search.return_value = make_response(list(range(11, 21)), total=95)
        result = engine.paginated_search(SearchRequest(query="desk"), per_page=10, page=2)
        request = transport.search.call_args.args[0]
        assert (request["from"], request["size"]) == (10, 10)
        assert result.page_count == 10
        assert result.total_hits == 95

    def test_first_page_starts_at_zero(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.paginated_search(SearchRequest(), per_page=20, page=1)
        assert transport.search.call_args.args[0]["from"] == 0

    def test_page_window_overrides_structured_window(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        engine.paginated_search(SearchRequest(query={"skip": 3, "limit": 4}), per_page=10, page=3)
        request = transport.search.call_args.args[0]
        assert (request["from"], request["size"]) == (20, 10)

    @pytest.mark.parametrize(("per_page", "page"), [(0, 1), (-10, 1), (10, 0)])
    def test_invalid_window_rejected_before_transport(
        self, engine: IndexSiftEngine, transport: MagicMock, per_page: int, page: int
    ) -> None:
        with pytest.raises(InvalidPaginationError):
            engine.paginated_search(SearchRequest(), per_page=per_page, page=page)
        transport.search.assert_not_called()

    def test_callback_result_returned_verbatim(self, engine: IndexSiftEngine, transport: MagicMock) -> None:
        raw = {"anything": True}
        result = engine.paginated_search(SearchRequest(response_callback=lambda c, q: raw), per_page=5, page=1)
        assert result is raw
        transport.search.assert_not_called()


# ══════════════════════════════════════════════════════════════════════════════
# Result mapping
# ══════════════════════════════════════════════════════════════════════════════


class TestResultMapping:
    def test_ids_and_total(self, engine: IndexSiftEngine) -> None:
        result = engine.search(SearchRequest())
        assert engine.ids_of(result) == ["3", "1", "2"]
        assert engine.total_count(result) == 3

    def test_hydrate_in_engine_order(self, engine: IndexSiftEngine) -> None:
        records = engine.hydrate(engine.search(SearchRequest()))
        assert [r.id for r in records] == [3, 1, 2]

    def test_hydrate_raw_response(self, engine: IndexSiftEngine, make_response) -> None:
        records = engine.hydrate(make_response([2, 404]))
        assert [r.id for r in records] == [2]

    def test_hydrate_without_fetcher(self, transport: MagicMock, make_response) -> None:
        engine = IndexSiftEngine(transport, "catalog")
        with pytest.raises(ConfigurationError):
            engine.hydrate(make_response([1]))

    def test_hydrate_with_explicit_fetcher(self, transport: MagicMock, fetcher, make_response) -> None:
        engine = IndexSiftEngine(transport, "catalog")
        assert [r.id for r in engine.hydrate(make_response([1]), fetcher=fetcher)] == [1]


class TestTrashedVisibility:
    def test_hidden_by_default(self, engine: IndexSiftEngine, fetcher, make_response) -> None:
        assert engine.trashed_visible is False
        engine.hydrate(make_response([4]))
        assert fetcher.calls[-1][1] is False

    def test_engine_toggle_returns_self(self, engine: IndexSiftEngine, fetcher, make_response) -> None:
        assert engine.with_trashed_visible() is engine
        records = engine.hydrate(make_response([4]))
        assert [r.id for r in records] == [4]

    def test_toggle_off(self, engine: IndexSiftEngine, fetcher, make_response) -> None:
        engine.with_trashed_visible().with_trashed_visible(False)
        assert engine.hydrate(make_response([4])) == []

    def test_request_flag_beats_engine_default(self, engine: IndexSiftEngine, fetcher) -> None:
        result = engine.search(SearchRequest().with_trashed_visible())
        engine.hydrate(result)
        assert fetcher.calls[-1][1] is True

    def test_explicit_argument_beats_request_flag(self, engine: IndexSiftEngine, fetcher) -> None:
        result = engine.search(SearchRequest(with_trashed=True))
        engine.hydrate(result, trashed_visible=False)
        assert fetcher.calls[-1][1] is False


# ══════════════════════════════════════════════════════════════════════════════
# Construction
# ══════════════════════════════════════════════════════════════════════════════


class TestFromSettings:
    def test_builds_http_transport(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            transport={"hosts": ["http://search.internal:9200"], "index": "catalog"},
            query={"default_size": 100},
        )
        engine = IndexSiftEngine.from_settings(settings)
        assert isinstance(engine.transport, HttpTransport)
        assert engine.index == "catalog"
        assert engine.compiler.settings.default_size == 100
        engine.transport.close()

    def test_default_construction_ignores_environment(
        self, transport: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("INDEXSIFT_QUERY__DEFAULT_SIZE", "not-a-number")
        engine = IndexSiftEngine(transport, "idx")
        assert engine.settings is None
        assert engine.compiler.settings.default_size == 10000
        engine.search(SearchRequest())
        assert transport.search.call_args.args[0]["size"] == 10000
