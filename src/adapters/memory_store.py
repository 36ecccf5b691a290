"""In-memory document store adapter.

Suitable for tests and single-process deployments. A single lock guards all
collections so create() and atomic_increment() are atomic across threads.
"""

from __future__ import annotations

import copy
import threading
from typing import Any

from src.ports.store import DocumentNotFoundError, DuplicateKeyError


def _matches(doc: dict[str, Any], field_equals: dict[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in field_equals.items())


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _coll(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def get_by_id(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self._lock:
            doc = self._coll(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def get_one(self, collection: str, field_equals: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            for doc in self._coll(collection).values():
                if _matches(doc, field_equals):
                    return copy.deepcopy(doc)
        return None

    def list_by(
        self,
        collection: str,
        field_equals: dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        with self._lock:
            docs = [
                copy.deepcopy(d)
                for d in self._coll(collection).values()
                if _matches(d, field_equals)
            ]
        if order_by:
            docs.sort(key=lambda d: (d.get(order_by) is None, d.get(order_by)), reverse=descending)
        return docs

    def create(self, collection: str, doc: dict[str, Any]) -> dict[str, Any]:
        doc_id = str(doc["id"])
        with self._lock:
            coll = self._coll(collection)
            if doc_id in coll:
                raise DuplicateKeyError(collection, doc_id)
            coll[doc_id] = copy.deepcopy(doc)
        return copy.deepcopy(doc)

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            coll = self._coll(collection)
            if doc_id not in coll:
                raise DocumentNotFoundError(collection, doc_id)
            coll[doc_id].update(copy.deepcopy(partial))
            return copy.deepcopy(coll[doc_id])

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._coll(collection).pop(doc_id, None) is not None

    def atomic_increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> int:
        with self._lock:
            coll = self._coll(collection)
            if doc_id not in coll:
                raise DocumentNotFoundError(collection, doc_id)
            value = int(coll[doc_id].get(field) or 0) + amount
            coll[doc_id][field] = value
            return value

    def clear(self) -> None:
        """Drop all collections - useful for testing."""
        with self._lock:
            self._collections.clear()
