"""Keyset (seek) pagination over documents.

Titles are not unique, so pages are keyed on the composite ``(title, id)``:
titles compare by code point and ties fall back to ascending id. The "after
cursor" predicate mirrors that order exactly, which is what keeps consecutive
pages free of gaps and repeats:

    include(doc) := doc.title > cursor.title
                 or (doc.title == cursor.title and doc.id > cursor.id)

Every call filters by owner, applies the predicate (skipped for the first page),
sorts, and truncates. A storage backend may answer the same query from an index
on ``(owner_id, title, id)`` but must return identical pages.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from lifedocs.schemas.models import Document, PageCursor


def sort_key(document: Document) -> tuple[str, int]:
    """Total-order key used for every listing."""
    return (document.title, document.id)


def is_after(document: Document, cursor: PageCursor) -> bool:
    """Return True when ``document`` sorts strictly after ``cursor``."""
    if document.title != cursor.title:
        return document.title > cursor.title
    return document.id > cursor.id


def select_page(
    documents: Iterable[Document],
    owner_id: UUID,
    limit: int,
    cursor: PageCursor | None = None,
) -> list[Document]:
    """Select one page of ``owner_id``'s documents from a snapshot.

    Args:
        documents: Snapshot of stored documents (any owner, any order).
        owner_id: Owner whose documents are listed.
        limit: Maximum page size. ``0`` yields an empty page.
        cursor: Last ``(title, id)`` of the previous page, or None for the first page.

    Returns:
        list[Document]: At most ``limit`` documents in ascending ``(title, id)`` order.

    Raises:
        ValueError: If limit is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    if limit == 0:
        return []

    candidates = [doc for doc in documents if doc.owner_id == owner_id]
    if cursor is not None:
        candidates = [doc for doc in candidates if is_after(doc, cursor)]

    candidates.sort(key=sort_key)
    return candidates[:limit]


__all__ = ["is_after", "select_page", "sort_key"]
