"""Contract every document store backend implements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from weather_journal.schemas import DeleteOutcome, DocumentRef


class DocumentStore(Protocol):
    """A document database with store-assigned ids and revisions."""

    def list_all(self, descending: bool = False) -> list[dict[str, Any]]:
        """Return every document body.

        Raises:
            StoreUnavailable: On transport error.
        """
        ...

    def create(self, doc: dict[str, Any]) -> DocumentRef:
        """Store a new document and return its id and first revision.

        Raises:
            StoreUnavailable: On transport error.
            WriteRejected: If the store does not report success.
        """
        ...

    def delete(self, doc_id: str, revision: str) -> DeleteOutcome:
        """Delete a document if ``revision`` is still its current revision."""
        ...
