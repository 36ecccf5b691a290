"""
SQLite document store adapter.

Documents are JSON bodies in a single `documents` table keyed by
(collection, id). The primary key gives create() its insert-if-absent
semantics and atomic_increment() is one UPDATE statement, so both are safe
under concurrent writers without application-level locking.
"""

from __future__ import annotations

import json
import re
import sqlite3
from typing import Any

from src.ports.store import DocumentNotFoundError, DuplicateKeyError

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _json_path(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise ValueError(f"Invalid document field name: {field!r}")
    return f"$.{field}"


def _where(collection: str, field_equals: dict[str, Any]) -> tuple[str, list[Any]]:
    clauses = ["collection = ?"]
    params: list[Any] = [collection]
    for field, value in field_equals.items():
        if value is None:
            clauses.append("json_extract(body, ?) IS NULL")
            params.append(_json_path(field))
        else:
            clauses.append("json_extract(body, ?) = ?")
            params.extend([_json_path(field), value])
    return " AND ".join(clauses), params


class SQLiteDocumentStore:
    def __init__(self, db_path: str, timeout: float = 30.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_conn(self) -> sqlite3.Connection:
        # Autocommit mode; multi-statement work opens its own transaction
        return sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)

    def get_by_id(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT body FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            return json.loads(row[0]) if row else None
        finally:
            conn.close()

    def get_one(self, collection: str, field_equals: dict[str, Any]) -> dict[str, Any] | None:
        where, params = _where(collection, field_equals)
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT body FROM documents WHERE {where} LIMIT 1", params
            ).fetchone()
            return json.loads(row[0]) if row else None
        finally:
            conn.close()

    def list_by(
        self,
        collection: str,
        field_equals: dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        where, params = _where(collection, field_equals)
        query = f"SELECT body FROM documents WHERE {where}"
        if order_by:
            query += " ORDER BY json_extract(body, ?) " + ("DESC" if descending else "ASC")
            params.append(_json_path(order_by))
        conn = self._get_conn()
        try:
            rows = conn.execute(query, params).fetchall()
            return [json.loads(r[0]) for r in rows]
        finally:
            conn.close()

    def create(self, collection: str, doc: dict[str, Any]) -> dict[str, Any]:
        doc_id = str(doc["id"])
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                (collection, doc_id, json.dumps(doc)),
            )
        except sqlite3.IntegrityError as e:
            raise DuplicateKeyError(collection, doc_id) from e
        finally:
            conn.close()
        return doc

    def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> dict[str, Any]:
        conn = self._get_conn()
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                row = conn.execute(
                    "SELECT body FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id),
                ).fetchone()
                if not row:
                    raise DocumentNotFoundError(collection, doc_id)
                body = json.loads(row[0])
                body.update(partial)
                conn.execute(
                    "UPDATE documents SET body = ? WHERE collection = ? AND id = ?",
                    (json.dumps(body), collection, doc_id),
                )
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise
            return body
        finally:
            conn.close()

    def delete(self, collection: str, doc_id: str) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?", (collection, doc_id)
            )
            return cur.rowcount > 0
        finally:
            conn.close()

    def atomic_increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> int:
        path = _json_path(field)
        conn = self._get_conn()
        try:
            # fetchall() steps the statement to completion so the write commits
            rows = conn.execute(
                """
                UPDATE documents
                SET body = json_set(body, ?, COALESCE(json_extract(body, ?), 0) + ?)
                WHERE collection = ? AND id = ?
                RETURNING json_extract(body, ?)
                """,
                (path, path, amount, collection, doc_id, path),
            ).fetchall()
            if not rows:
                raise DocumentNotFoundError(collection, doc_id)
            return int(rows[0][0])
        finally:
            conn.close()
