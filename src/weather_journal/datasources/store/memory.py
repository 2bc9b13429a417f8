"""In-process document store with CouchDB-style revisions.

Used by the test suite and by ``store_url = "memory://"`` for local runs.
Revisions look like CouchDB's (``"1-<hex>"``) but are only ever compared
for equality.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from typing import Any

from weather_journal.schemas import DeleteOutcome, DocumentRef

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Revisioned document store kept in a dict, listed in creation order."""

    def __init__(self) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._docs

    def get(self, doc_id: str) -> dict[str, Any] | None:
        """Return a copy of the current document body, or None."""
        with self._lock:
            doc = self._docs.get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def list_all(self, descending: bool = False) -> list[dict[str, Any]]:
        with self._lock:
            docs = [copy.deepcopy(d) for d in self._docs.values()]
        if descending:
            docs.reverse()
        return docs

    def create(self, doc: dict[str, Any]) -> DocumentRef:
        doc_id = str(doc.get("_id") or uuid.uuid4().hex)
        revision = _new_revision(1)
        with self._lock:
            stored = {k: v for k, v in copy.deepcopy(doc).items() if k not in ("_id", "_rev")}
            self._docs[doc_id] = {"_id": doc_id, "_rev": revision, **stored}
        logger.debug("Stored %s at %s", doc_id, revision)
        return DocumentRef(id=doc_id, revision=revision)

    def restore(self, doc: dict[str, Any]) -> DocumentRef:
        """Insert a document exactly as given, ``_id`` and ``_rev`` included."""
        ref = DocumentRef(id=str(doc["_id"]), revision=str(doc["_rev"]))
        with self._lock:
            self._docs[ref.id] = copy.deepcopy(doc)
        return ref

    def put(self, doc_id: str, revision: str, doc: dict[str, Any]) -> DocumentRef | None:
        """Replace a document, bumping its revision.

        Returns None if ``revision`` is not current. Lets tests advance a
        document's revision the way a concurrent writer would.
        """
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None or current["_rev"] != revision:
                return None
            generation = _generation(current["_rev"]) + 1
            new_rev = _new_revision(generation)
            stored = {k: v for k, v in copy.deepcopy(doc).items() if k not in ("_id", "_rev")}
            self._docs[doc_id] = {"_id": doc_id, "_rev": new_rev, **stored}
        return DocumentRef(id=doc_id, revision=new_rev)

    def delete(self, doc_id: str, revision: str) -> DeleteOutcome:
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None:
                return DeleteOutcome.NOT_FOUND
            if current["_rev"] != revision:
                return DeleteOutcome.CONFLICT
            del self._docs[doc_id]
        logger.debug("Deleted %s at %s", doc_id, revision)
        return DeleteOutcome.DELETED


def _new_revision(generation: int) -> str:
    return f"{generation}-{uuid.uuid4().hex}"


def _generation(revision: str) -> int:
    head, _, _ = revision.partition("-")
    return int(head) if head.isdigit() else 0
