"""Revisioned document store.

Public API:
  - base: DocumentStore protocol
  - couch: CouchDocumentStore (CouchDB / Cloudant HTTP API)
  - memory: InMemoryDocumentStore (tests and local runs)
"""

from weather_journal.datasources.store.base import DocumentStore
from weather_journal.datasources.store.couch import CouchDocumentStore
from weather_journal.datasources.store.memory import InMemoryDocumentStore

__all__ = [
    "CouchDocumentStore",
    "DocumentStore",
    "InMemoryDocumentStore",
]
