"""Per-command context attached to every LifeDocs log line.

A CLI command runs inside one :func:`correlation_scope`, so the extraction,
summarization and save logs of a single ``documents create`` share an id. Inside
the ingestion pipeline, :func:`pipeline_stage` names the step that is running; the
OCR and Ollama adapters log under it without being told.

Both values live in ``ContextVar`` objects, so concurrent asyncio tasks each see
their own, and a scope restores the previous value when it exits.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_stage_var: ContextVar[str | None] = ContextVar("pipeline_stage", default=None)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run the block under one correlation id.

    Args:
        correlation_id: Id to use. A new UUID4 hex string when omitted.

    Yields:
        The id in effect inside the block.

    Example:
        >>> with correlation_scope() as cid:
        ...     get_correlation_id() == cid
        True
    """
    cid = correlation_id or uuid.uuid4().hex
    token = _correlation_id_var.set(cid)
    try:
        yield cid
    finally:
        _correlation_id_var.reset(token)


def get_correlation_id() -> str | None:
    return _correlation_id_var.get()


@contextmanager
def pipeline_stage(stage: str) -> Iterator[None]:
    """Mark the block as one step of document ingestion ("extract", "summarize", "persist")."""
    token = _stage_var.set(stage)
    try:
        yield
    finally:
        _stage_var.reset(token)


def get_pipeline_stage() -> str | None:
    return _stage_var.get()


__all__ = [
    "correlation_scope",
    "get_correlation_id",
    "get_pipeline_stage",
    "pipeline_stage",
]
