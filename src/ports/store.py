"""
Document store port.

The core treats persistence as an opaque document store. Only single-document
atomic operations are assumed: `create` is insert-if-absent and
`atomic_increment` is a server-side increment. No multi-document transactions.
"""

from __future__ import annotations

from typing import Any, Protocol


class DocumentStorePort(Protocol):
    def get_by_id(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the document or None."""
        ...

    def get_one(self, collection: str, field_equals: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first document whose fields equal all given values."""
        ...

    def list_by(
        self,
        collection: str,
        field_equals: dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return all documents whose fields equal all given values."""
        ...

    def create(self, collection: str, doc: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a document keyed by doc["id"].
        Raises DuplicateKeyError if a document with that id already exists.
        """
        ...

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> dict[str, Any]:
        """
        Shallow-merge partial into the stored document and return the result.
        Raises DocumentNotFoundError if absent.
        """
        ...

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete the document; returns False if it did not exist."""
        ...

    def atomic_increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> int:
        """
        Increment a numeric field in a single storage-side operation.
        Returns the new value. Raises DocumentNotFoundError if absent.
        """
        ...


class StorageError(Exception):
    """Base class for storage errors."""


class DuplicateKeyError(StorageError):
    """Raised by create() when the id is already present."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document already exists: {collection}/{doc_id}")


class DocumentNotFoundError(StorageError):
    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document not found: {collection}/{doc_id}")
