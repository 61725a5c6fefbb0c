"""Port for summarizing extracted document text."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lifedocs.schemas.models import SummaryResult


class DocumentSummarizer(ABC):
    """Summarizer interface consumed by the ingestion pipeline."""

    @abstractmethod
    async def summarize(self, text: str) -> SummaryResult:
        """Produce a summary and a title for ``text`` or raise ``SummarizationError``."""


__all__ = ["DocumentSummarizer"]
