"""Core translation steps: compile, build bulk payloads, map results."""

from indexsift.core.bulk import BulkOperationBuilder
from indexsift.core.compiler import QueryCompiler
from indexsift.core.engine import IndexSiftEngine
from indexsift.core.mapper import ResultMapper

__all__ = ["BulkOperationBuilder", "IndexSiftEngine", "QueryCompiler", "ResultMapper"]
