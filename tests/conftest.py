"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

import pytest

from indexsift.config.settings import Settings
from indexsift.core.engine import IndexSiftEngine


@dataclass
class Product:
    """Minimal record satisfying ``SearchableRecord``."""

    id: int
    name: str = ""
    price: float = 0.0
    deleted: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_searchable_document(self) -> dict[str, Any]:
        if not self.name:
            return {}
        return {"id": self.id, "name": self.name, "price": self.price, **self.extra}

    def collection_type(self) -> str:
        return "products"

    def identifier(self) -> int:
        return self.id


class FakeFetcher:
    """Record fetcher over an in-memory table that records its calls."""

    def __init__(self, records: Iterable[Product]) -> None:
        self.table = {record.id: record for record in records}
        self.calls: list[tuple[list[str], bool]] = []

    def __call__(self, ids: Sequence[str], *, with_trashed: bool = False) -> list[Product]:
        self.calls.append((list(ids), with_trashed))
        wanted = {int(i) for i in ids}
        # Sorted by id, not by the order asked for
        return [
            record
            for key, record in sorted(self.table.items())
            if key in wanted and (with_trashed or not record.deleted)
        ]


def _make_response(ids: Sequence[Any], total: int | dict[str, Any] | None = None) -> dict[str, Any]:
    """Build an engine search response for the given hit ids."""
    return {
        "took": 3,
        "hits": {
            "total": len(ids) if total is None else total,
            "hits": [{"_id": str(i), "_source": {"id": i}} for i in ids],
        },
    }


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id=1, name="Desk lamp", price=25.0),
        Product(id=2, name="Office chair", price=180.0),
        Product(id=3, name="Standing desk", price=420.0),
        Product(id=4, name="Old monitor", price=60.0, deleted=True),
    ]


@pytest.fixture
def fetcher(products: list[Product]) -> FakeFetcher:
    return FakeFetcher(products)


@pytest.fixture
def transport() -> MagicMock:
    """Transport double answering every search with hits 3, 1, 2."""
    mock = MagicMock()
    mock.search.return_value = _make_response([3, 1, 2])
    mock.bulk.return_value = {"took": 1, "errors": False, "items": []}
    return mock


@pytest.fixture
def engine(transport: MagicMock, fetcher: FakeFetcher, settings: Settings) -> IndexSiftEngine:
    return IndexSiftEngine(transport, "catalog", fetcher=fetcher, settings=settings)


@pytest.fixture
def make_response() -> Any:
    """Factory for engine search responses: ``make_response([3, 1], total=40)``."""
    return _make_response


@pytest.fixture
def make_product() -> type[Product]:
    return Product
