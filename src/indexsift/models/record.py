"""Record capabilities — What IndexSift needs from application records.

IndexSift never imports an ORM. Records only have to satisfy
``SearchableRecord``, and hydration goes through a ``RecordFetcher``
supplied by the persistence layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SearchableRecord(Protocol):
    """An application record that can be written to the search index."""

    def to_searchable_document(self) -> Mapping[str, Any]:
        """Serialize the record. An empty mapping means "do not index"."""
        ...

    def collection_type(self) -> str:
        """Type tag stored as the document's ``_type``."""
        ...

    def identifier(self) -> Any:
        """Primary key stored as the document's ``_id``."""
        ...


class RecordFetcher(Protocol):
    """Loads records for a batch of identifiers.

    Implementations return records in any order and may omit identifiers
    that no longer exist. ``with_trashed`` asks for soft-deleted records too.
    """

    def __call__(self, ids: Sequence[str], *, with_trashed: bool = False) -> Iterable[SearchableRecord]: ...
