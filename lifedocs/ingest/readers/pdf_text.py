"""PDF text-layer extraction using pdfminer.six.

Reads the embedded text of a PDF without any network call. Scanned PDFs have no
text layer and come back empty; the extraction router sends those to OCR.
"""

import asyncio
import io
import logging

from pdfminer.high_level import extract_text as pdfminer_extract_text

from lifedocs.core.errors import ExtractionError
from lifedocs.core.ports.text_extractor import TextExtractor
from lifedocs.schemas.models import UploadedInput

logger = logging.getLogger(__name__)


class PdfTextLayerExtractor(TextExtractor):
    """Extract the text layer of a PDF upload."""

    async def extract_text(self, uploaded: UploadedInput) -> str:
        """Return the PDF's embedded text (possibly empty).

        Raises:
            ExtractionError: If the bytes cannot be parsed as a PDF.
        """
        try:
            text = await asyncio.to_thread(self._read_text_layer, uploaded.file_bytes)
        except Exception as e:
            logger.warning(
                "Unreadable PDF",
                extra={"file_name": uploaded.file_name, "error": str(e)},
            )
            raise ExtractionError(f"Unreadable PDF {uploaded.file_name!r}: {e}") from e

        logger.debug(
            "Read PDF text layer",
            extra={"file_name": uploaded.file_name, "chars": len(text)},
        )
        return text

    @staticmethod
    def _read_text_layer(data: bytes) -> str:
        return pdfminer_extract_text(io.BytesIO(data))


__all__ = ["PdfTextLayerExtractor"]
