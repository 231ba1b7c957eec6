"""Bulk operation builder — Turns record batches into bulk index/delete calls."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from indexsift.models.bulk import BulkAction, BulkOperation
from indexsift.models.record import SearchableRecord

logger = logging.getLogger(__name__)


class BulkOperationBuilder:
    """Builds ``BulkOperation`` payloads for one index.

    Both operations request ``refresh`` so the index reflects the write
    before the call returns. Input order is preserved and repeated
    identifiers are not collapsed.

    Args:
        index: Target index name.
    """

    def __init__(self, index: str) -> None:
        self.index = index

    def build_index_batch(self, records: Iterable[SearchableRecord]) -> BulkOperation:
        """One ``index`` action per record; records serializing to nothing are skipped."""
        actions: list[BulkAction] = []
        skipped = 0
        for record in records:
            document = record.to_searchable_document()
            if not document:
                skipped += 1
                continue
            actions.append(
                BulkAction(
                    op="index",
                    index=self.index,
                    type=record.collection_type(),
                    id=record.identifier(),
                    document=dict(document),
                )
            )

        if skipped:
            logger.debug("Skipped %d records with empty searchable documents", skipped)
        return BulkOperation(actions=actions, refresh=True)

    def build_delete_batch(self, records: Iterable[SearchableRecord]) -> BulkOperation:
        """One ``delete`` action per record."""
        actions = [
            BulkAction(
                op="delete",
                index=self.index,
                type=record.collection_type(),
                id=record.identifier(),
            )
            for record in records
        ]
        return BulkOperation(actions=actions, refresh=True)
