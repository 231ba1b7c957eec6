"""Data models for requests, compiled queries, bulk payloads and results."""

from indexsift.models.bulk import BulkAction, BulkOperation
from indexsift.models.filters import FilterValue, FreeText, GeoDistance, StructuredQuery, TextQuery
from indexsift.models.query import CompiledQuery
from indexsift.models.record import RecordFetcher, SearchableRecord
from indexsift.models.request import SearchRequest, SortOrder
from indexsift.models.result import Hit, SearchResult

__all__ = [
    "BulkAction",
    "BulkOperation",
    "CompiledQuery",
    "FilterValue",
    "FreeText",
    "GeoDistance",
    "Hit",
    "RecordFetcher",
    "SearchRequest",
    "SearchResult",
    "SearchableRecord",
    "SortOrder",
    "StructuredQuery",
    "TextQuery",
]
