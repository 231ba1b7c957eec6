"""IndexSift exceptions.

Transport failures have no type here: whatever the transport raises
reaches the caller unchanged.
"""


class IndexSiftError(Exception):
    """Base exception for IndexSift errors."""


class MalformedResponseError(IndexSiftError):
    """Raised when a search response lacks the expected ``hits`` structure."""


class InvalidPaginationError(IndexSiftError, ValueError):
    """Raised when a page size or page number cannot describe a window."""


class ConfigurationError(IndexSiftError):
    """Raised when the engine is missing a collaborator or setting it needs."""
