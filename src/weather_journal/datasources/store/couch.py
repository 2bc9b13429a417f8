"""CouchDB / Cloudant document store over the HTTP API.

API docs: https://docs.couchdb.org/en/stable/api/database/index.html

Endpoints used:
  - ``GET  /{db}/_all_docs?include_docs=true``  list every document body
  - ``POST /{db}``                               create, server assigns ``_id``
  - ``DELETE /{db}/{id}?rev={rev}``              delete a specific revision
  - ``PUT  /{db}``                               create the database
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from weather_journal.errors import StoreUnavailable, WriteRejected
from weather_journal.schemas import DeleteOutcome, DocumentRef
from weather_journal.services.http import create_session

logger = logging.getLogger(__name__)

# 202 means the write was accepted but not yet confirmed by every replica
CREATED_STATUSES = frozenset({201, 202})
DELETED_STATUSES = frozenset({200, 202})


class CouchDocumentStore:
    """Document store backed by one CouchDB/Cloudant database."""

    def __init__(
        self,
        base_url: str,
        db_name: str,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.db_name = db_name
        self.session = session or create_session()

    @property
    def db_url(self) -> str:
        return f"{self.base_url}/{quote(self.db_name, safe='')}"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Document store request failed: %s %s: %s", method, url, exc)
            msg = f"Document store unreachable: {exc}"
            raise StoreUnavailable(msg) from exc

    def ensure_database(self) -> bool:
        """Create the database if needed. Returns True if it was created."""
        resp = self._request("PUT", self.db_url)
        if resp.status_code in CREATED_STATUSES:
            logger.info("Created database %s", self.db_name)
            return True
        if resp.status_code == 412:
            return False
        raise WriteRejected(resp.status_code, _reason(resp))

    def list_all(self, descending: bool = False) -> list[dict[str, Any]]:
        """Return every document body, skipping design documents."""
        params = {"include_docs": "true"}
        if descending:
            params["descending"] = "true"
        resp = self._request("GET", f"{self.db_url}/_all_docs", params=params)
        if resp.status_code != 200:
            msg = f"Listing {self.db_name} failed (HTTP {resp.status_code}): {_reason(resp)}"
            raise StoreUnavailable(msg)
        try:
            rows = resp.json().get("rows", [])
        except ValueError as exc:
            msg = f"Listing {self.db_name} returned invalid JSON"
            raise StoreUnavailable(msg) from exc

        docs: list[dict[str, Any]] = []
        for row in rows:
            doc = row.get("doc")
            if not doc or str(row.get("id", "")).startswith("_design/"):
                continue
            docs.append(doc)
        return docs

    def create(self, doc: dict[str, Any]) -> DocumentRef:
        resp = self._request("POST", self.db_url, json=doc)
        if resp.status_code not in CREATED_STATUSES:
            raise WriteRejected(resp.status_code, _reason(resp))
        try:
            body = resp.json()
            return DocumentRef(id=body["id"], revision=body["rev"])
        except (ValueError, KeyError, TypeError) as exc:
            msg = "Document store did not return an id and revision"
            raise WriteRejected(resp.status_code, msg) from exc

    def delete(self, doc_id: str, revision: str) -> DeleteOutcome:
        url = f"{self.db_url}/{quote(doc_id, safe='')}"
        resp = self._request("DELETE", url, params={"rev": revision})
        if resp.status_code in DELETED_STATUSES:
            return DeleteOutcome.DELETED
        if resp.status_code == 409:
            return DeleteOutcome.CONFLICT
        if resp.status_code == 404:
            return DeleteOutcome.NOT_FOUND
        raise WriteRejected(resp.status_code, _reason(resp))


def _reason(resp: requests.Response) -> str:
    """Best-effort ``error: reason`` text from a CouchDB error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason or ""
    if not isinstance(body, dict):
        return resp.reason or ""
    parts = [str(body[k]) for k in ("error", "reason") if body.get(k)]
    return ": ".join(parts) or (resp.reason or "")
