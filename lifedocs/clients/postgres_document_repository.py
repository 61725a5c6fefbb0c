"""PostgreSQL implementation of the DocumentRepository port.

Expects a ``documents`` table of the form::

    CREATE TABLE documents (
        id      SERIAL PRIMARY KEY,
        title   TEXT NOT NULL,
        content TEXT NOT NULL,
        tags    TEXT[] NOT NULL DEFAULT '{}',
        user_id UUID NOT NULL
    );
    CREATE INDEX documents_owner_title_id ON documents (user_id, (title COLLATE "C"), id);

Titles are ordered with the ``"C"`` collation so that the database sorts by code
point, the same order the in-memory backend uses.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

import psycopg2
from psycopg2.extensions import connection as PgConnection  # noqa: N812
from psycopg2.extras import RealDictCursor

from lifedocs.common.logging import get_logger
from lifedocs.common.postgres_pool import PostgresPool, PostgresPoolError
from lifedocs.core.errors import PersistenceError
from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.schemas.models import Document

logger = get_logger(__name__)

_COLUMNS = "id, title, content, tags, user_id"

_SELECT_BY_ID = f"SELECT {_COLUMNS} FROM documents WHERE id = %s"

_SELECT_FIRST_PAGE = f"""
    SELECT {_COLUMNS} FROM documents
    WHERE user_id = %s
    ORDER BY title COLLATE "C" ASC, id ASC
    LIMIT %s
"""

_SELECT_PAGE_AFTER = f"""
    SELECT {_COLUMNS} FROM documents
    WHERE user_id = %s
      AND (title COLLATE "C", id) > (%s, %s)
    ORDER BY title COLLATE "C" ASC, id ASC
    LIMIT %s
"""

_INSERT_NEW = f"""
    INSERT INTO documents (title, content, tags, user_id)
    VALUES (%s, %s, %s, %s)
    RETURNING {_COLUMNS}
"""

_INSERT_WITH_ID = f"""
    INSERT INTO documents (id, title, content, tags, user_id)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING {_COLUMNS}
"""

# Keep the serial sequence ahead of explicitly inserted ids.
_SYNC_SEQUENCE = """
    SELECT setval(pg_get_serial_sequence('documents', 'id'),
                  GREATEST((SELECT MAX(id) FROM documents), 1))
"""


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        tags=list(row["tags"] or []),
        owner_id=UUID(str(row["user_id"])),
    )


class PostgresDocumentRepository(DocumentRepository):
    """DocumentRepository backed by PostgreSQL through a psycopg2 pool.

    psycopg2 is blocking, so every call goes through ``PostgresPool.run``, which
    runs it in a worker thread on its own pooled connection. Each list call is a
    single SELECT and therefore reads one consistent snapshot.
    """

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with a PostgreSQL connection pool.

        Args:
            pool: PostgresPool shared by the process.
        """
        self.pool = pool
        logger.info("Initialized PostgresDocumentRepository")

    async def get(self, doc_id: int) -> Document | None:
        rows = await self._run(_SELECT_BY_ID, (doc_id,))
        return _row_to_document(rows[0]) if rows else None

    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]:
        if self._empty_page(limit):
            return []
        rows = await self._run(_SELECT_FIRST_PAGE, (str(owner_id), limit))
        return [_row_to_document(row) for row in rows]

    async def list_by_owner_after(
        self,
        owner_id: UUID,
        limit: int,
        cursor_title: str,
        cursor_id: int,
    ) -> list[Document]:
        if self._empty_page(limit):
            return []
        rows = await self._run(
            _SELECT_PAGE_AFTER, (str(owner_id), cursor_title, cursor_id, limit)
        )
        return [_row_to_document(row) for row in rows]

    async def save(self, document: Document) -> Document:
        if document.id == 0:
            query = _INSERT_NEW
            params: tuple[Any, ...] = (
                document.title,
                document.content,
                list(document.tags),
                str(document.owner_id),
            )
        else:
            query = _INSERT_WITH_ID
            params = (
                document.id,
                document.title,
                document.content,
                list(document.tags),
                str(document.owner_id),
            )

        rows = await self._run(query, params, write=True, sync_sequence=document.id != 0)
        saved = _row_to_document(rows[0])
        logger.info("Saved document", extra={"doc_id": saved.id, "owner_id": str(saved.owner_id)})
        return saved

    @staticmethod
    def _empty_page(limit: int) -> bool:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return limit == 0

    async def _run(
        self,
        query: str,
        params: tuple[Any, ...],
        *,
        write: bool = False,
        sync_sequence: bool = False,
    ) -> list[dict[str, Any]]:
        try:
            return await self.pool.run(self._execute, query, params, write, sync_sequence)
        except PostgresPoolError as e:
            raise PersistenceError(str(e)) from e

    def _execute(
        self,
        conn: PgConnection,
        query: str,
        params: tuple[Any, ...],
        write: bool,
        sync_sequence: bool,
    ) -> list[dict[str, Any]]:
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                rows = [dict(row) for row in cur.fetchall()]
                if sync_sequence:
                    cur.execute(_SYNC_SEQUENCE)
        except psycopg2.IntegrityError as e:
            conn.rollback()
            logger.warning("Document constraint violation", extra={"error": str(e)})
            raise PersistenceError(f"Constraint violation: {e}") from e

        if write:
            conn.commit()
        else:
            conn.rollback()
        return rows


__all__ = ["PostgresDocumentRepository"]
