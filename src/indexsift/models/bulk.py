"""Bulk operation models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class BulkAction(BaseModel):
    """One action of a bulk call: a header, plus a document for ``index``."""

    op: Literal["index", "delete"] = Field(description="Bulk action type")
    index: str = Field(description="Target index")
    type: str = Field(description="Document type tag")
    id: Any = Field(description="Document identifier")
    document: dict[str, Any] | None = Field(default=None, description="Document body (index only)")

    def header(self) -> dict[str, Any]:
        return {self.op: {"_index": self.index, "_type": self.type, "_id": self.id}}

    def lines(self) -> list[dict[str, Any]]:
        if self.op == "delete" or self.document is None:
            return [self.header()]
        return [self.header(), self.document]


class BulkOperation(BaseModel):
    """An ordered batch of actions sent in a single bulk call."""

    actions: list[BulkAction] = Field(default_factory=list, description="Actions, in input order")
    refresh: bool = Field(default=True, description="Make writes visible before the call returns")

    @property
    def body(self) -> list[dict[str, Any]]:
        return [line for action in self.actions for line in action.lines()]

    def __len__(self) -> int:
        return len(self.actions)

    def to_request(self) -> dict[str, Any]:
        """Render the request dict handed to ``SearchTransport.bulk``."""
        return {"refresh": self.refresh, "body": self.body}
