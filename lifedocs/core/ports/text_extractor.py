"""Port for obtaining text from uploaded files."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lifedocs.schemas.models import UploadedInput


class TextExtractor(ABC):
    """Extractor interface consumed by the ingestion pipeline."""

    @abstractmethod
    async def extract_text(self, uploaded: UploadedInput) -> str:
        """Return the text of ``uploaded`` or raise ``ExtractionError``."""


__all__ = ["TextExtractor"]
