"""Extraction router for uploaded files.

Routing rules:
    PDF            -> text layer first; empty or whitespace-only -> OCR
    image (OCR-able) -> OCR
    anything else  -> "" (nothing attempted, no error)
"""

import logging

from lifedocs.core.ports.text_extractor import TextExtractor
from lifedocs.schemas.models import UploadedInput

logger = logging.getLogger(__name__)


class UploadedFileTextExtractor(TextExtractor):
    """TextExtractor that picks the text-layer or OCR strategy per file."""

    def __init__(self, pdf_extractor: TextExtractor, ocr_extractor: TextExtractor) -> None:
        self.pdf_extractor = pdf_extractor
        self.ocr_extractor = ocr_extractor

    async def extract_text(self, uploaded: UploadedInput) -> str:
        if uploaded.is_pdf():
            text = await self.pdf_extractor.extract_text(uploaded)
            if text.strip():
                return text
            logger.info(
                "PDF has no text layer, falling back to OCR",
                extra={"file_name": uploaded.file_name},
            )
            return await self.ocr_extractor.extract_text(uploaded)

        if uploaded.is_ocr_eligible():
            return await self.ocr_extractor.extract_text(uploaded)

        logger.info(
            "Unsupported file type, no extraction attempted",
            extra={"file_name": uploaded.file_name, "extension": uploaded.extension},
        )
        return ""


__all__ = ["UploadedFileTextExtractor"]
