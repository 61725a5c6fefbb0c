"""Core use cases - Application service orchestration.

Use cases orchestrate workflows across ports without containing framework-specific code.
"""

from __future__ import annotations

from lifedocs.core.use_cases.create_document import CreateDocumentUseCase
from lifedocs.core.use_cases.get_document import GetDocumentUseCase
from lifedocs.core.use_cases.list_documents import (
    DEFAULT_PAGE_SIZE,
    DocumentPage,
    ListDocumentsUseCase,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "CreateDocumentUseCase",
    "DocumentPage",
    "GetDocumentUseCase",
    "ListDocumentsUseCase",
]
