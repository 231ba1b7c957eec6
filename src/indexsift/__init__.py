"""IndexSift — Translation layer between search intent and a document search engine."""

from indexsift.core.engine import IndexSiftEngine
from indexsift.exceptions import (
    ConfigurationError,
    IndexSiftError,
    InvalidPaginationError,
    MalformedResponseError,
)
from indexsift.models.request import SearchRequest, SortOrder
from indexsift.models.result import Hit, SearchResult

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Hit",
    "IndexSiftEngine",
    "IndexSiftError",
    "InvalidPaginationError",
    "MalformedResponseError",
    "SearchRequest",
    "SearchResult",
    "SortOrder",
    "__version__",
]
