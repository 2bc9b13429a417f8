"""Tests for the document store backends."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from weather_journal.datasources.store import CouchDocumentStore, InMemoryDocumentStore
from weather_journal.errors import StoreUnavailable, WriteRejected
from weather_journal.schemas import DeleteOutcome, DocumentRef

BASE = "https://account.cloudant.com"


def couch_response(status: int, body: Any = None) -> Mock:
    resp = Mock(spec=requests.Response)
    resp.status_code = status
    resp.reason = "Reason"
    resp.json.return_value = body if body is not None else {}
    return resp


def couch_store(*responses: Mock) -> tuple[CouchDocumentStore, Mock]:
    session = Mock(spec=requests.Session)
    session.request.side_effect = list(responses)
    return CouchDocumentStore(BASE, "observations", session=session), session


class TestInMemoryStore:
    """Test the revisioned in-memory store."""

    def test_create_assigns_id_and_revision(self) -> None:
        store = InMemoryDocumentStore()
        ref = store.create({"value": 1})
        assert ref.id
        assert ref.revision.startswith("1-")
        assert store.get(ref.id) == {"_id": ref.id, "_rev": ref.revision, "value": 1}

    def test_ids_unique(self) -> None:
        store = InMemoryDocumentStore()
        assert store.create({}).id != store.create({}).id

    def test_list_in_creation_order(self) -> None:
        store = InMemoryDocumentStore()
        for v in (1, 2, 3):
            store.create({"value": v})
        assert [d["value"] for d in store.list_all()] == [1, 2, 3]
        assert [d["value"] for d in store.list_all(descending=True)] == [3, 2, 1]

    def test_list_returns_copies(self) -> None:
        store = InMemoryDocumentStore()
        ref = store.create({"value": 1})
        store.list_all()[0]["value"] = 99
        assert store.get(ref.id)["value"] == 1

    def test_delete_matching_revision(self) -> None:
        store = InMemoryDocumentStore()
        ref = store.create({"value": 1})
        assert store.delete(ref.id, ref.revision) is DeleteOutcome.DELETED
        assert len(store) == 0

    def test_delete_conflict(self) -> None:
        store = InMemoryDocumentStore()
        store.restore({"_id": "abc123", "_rev": "3-def", "value": 1})
        assert store.delete("abc123", "2-xyz") is DeleteOutcome.CONFLICT
        assert "abc123" in store

    def test_delete_missing(self) -> None:
        assert InMemoryDocumentStore().delete("x", "1-a") is DeleteOutcome.NOT_FOUND

    def test_put_bumps_revision(self) -> None:
        store = InMemoryDocumentStore()
        ref = store.create({"value": 1})
        new = store.put(ref.id, ref.revision, {"value": 2})
        assert new is not None
        assert new.revision.startswith("2-")
        assert store.get(ref.id)["value"] == 2

    def test_put_stale_revision(self) -> None:
        store = InMemoryDocumentStore()
        ref = store.create({"value": 1})
        assert store.put(ref.id, "1-other", {"value": 2}) is None


class TestCouchListAll:
    """Test listing through _all_docs."""

    def test_returns_document_bodies(self) -> None:
        body = {
            "rows": [
                {"id": "a", "doc": {"_id": "a", "_rev": "1-x", "value": 1}},
                {"id": "_design/views", "doc": {"_id": "_design/views"}},
                {"id": "b", "doc": {"_id": "b", "_rev": "1-y", "value": 2}},
            ]
        }
        store, session = couch_store(couch_response(200, body))

        docs = store.list_all()

        assert [d["_id"] for d in docs] == ["a", "b"]
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == f"{BASE}/observations/_all_docs"
        assert session.request.call_args.kwargs["params"] == {"include_docs": "true"}

    def test_descending(self) -> None:
        store, session = couch_store(couch_response(200, {"rows": []}))
        store.list_all(descending=True)
        params = session.request.call_args.kwargs["params"]
        assert params["descending"] == "true"

    def test_transport_error(self) -> None:
        store, _ = couch_store()
        store.session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(StoreUnavailable):
            store.list_all()

    def test_error_status(self) -> None:
        store, _ = couch_store(couch_response(500, {"error": "internal"}))
        with pytest.raises(StoreUnavailable):
            store.list_all()


class TestCouchCreate:
    """Test POST /{db}."""

    def test_created(self) -> None:
        store, session = couch_store(couch_response(201, {"ok": True, "id": "a1", "rev": "1-x"}))

        ref = store.create({"value": 42})

        assert ref == DocumentRef(id="a1", revision="1-x")
        method, url = session.request.call_args.args
        assert method == "POST"
        assert url == f"{BASE}/observations"
        assert session.request.call_args.kwargs["json"] == {"value": 42}

    def test_accepted(self) -> None:
        store, _ = couch_store(couch_response(202, {"ok": True, "id": "a1", "rev": "1-x"}))
        assert store.create({}).id == "a1"

    def test_rejected(self) -> None:
        store, _ = couch_store(couch_response(403, {"error": "forbidden", "reason": "read only"}))
        with pytest.raises(WriteRejected) as excinfo:
            store.create({})
        assert excinfo.value.status_code == 403
        assert "read only" in str(excinfo.value)

    def test_missing_id_in_response(self) -> None:
        store, _ = couch_store(couch_response(201, {"ok": True}))
        with pytest.raises(WriteRejected):
            store.create({})

    def test_timeout(self) -> None:
        store, _ = couch_store()
        store.session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(StoreUnavailable):
            store.create({})


class TestCouchDelete:
    """Test DELETE /{db}/{id}?rev=."""

    def test_deleted(self) -> None:
        store, session = couch_store(couch_response(200, {"ok": True}))

        assert store.delete("abc123", "3-def") is DeleteOutcome.DELETED

        method, url = session.request.call_args.args
        assert method == "DELETE"
        assert url == f"{BASE}/observations/abc123"
        assert session.request.call_args.kwargs["params"] == {"rev": "3-def"}

    def test_conflict(self) -> None:
        store, _ = couch_store(couch_response(409, {"error": "conflict"}))
        assert store.delete("abc123", "2-xyz") is DeleteOutcome.CONFLICT

    def test_not_found(self) -> None:
        store, _ = couch_store(couch_response(404, {"error": "not_found"}))
        assert store.delete("abc123", "2-xyz") is DeleteOutcome.NOT_FOUND

    def test_id_is_quoted(self) -> None:
        store, session = couch_store(couch_response(200))
        store.delete("a/b", "1-x")
        assert session.request.call_args.args[1] == f"{BASE}/observations/a%2Fb"

    def test_unexpected_status(self) -> None:
        store, _ = couch_store(couch_response(401, {"error": "unauthorized"}))
        with pytest.raises(WriteRejected):
            store.delete("abc123", "1-x")


class TestCouchEnsureDatabase:
    """Test PUT /{db}."""

    def test_created(self) -> None:
        store, _ = couch_store(couch_response(201, {"ok": True}))
        assert store.ensure_database() is True

    def test_already_exists(self) -> None:
        store, _ = couch_store(couch_response(412, {"error": "file_exists"}))
        assert store.ensure_database() is False
