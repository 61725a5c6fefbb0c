"""Remote OCR through a tesseract-server HTTP endpoint.

Posts the uploaded file as multipart form data to ``{base_url}/tesseract`` with a
JSON ``options`` part and reads the recognized text from ``data.stdout``.
"""

import json
import logging

import httpx
from pydantic import BaseModel, ValidationError

from lifedocs.common.resilience import resilient_async_call
from lifedocs.core.errors import ExtractionError
from lifedocs.core.ports.text_extractor import TextExtractor
from lifedocs.schemas.models import UploadedInput

logger = logging.getLogger(__name__)


class TesseractData(BaseModel):
    stdout: str
    stderr: str = ""


class TesseractResponse(BaseModel):
    data: TesseractData


class TesseractOcrExtractor(TextExtractor):
    """OCR extractor backed by a tesseract-server instance.

    Attributes:
        url: Full endpoint URL (``{base_url}/tesseract``).
        languages: Tesseract language codes sent with every request.
    """

    def __init__(
        self,
        base_url: str,
        languages: list[str] | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
        max_attempts: int = 1,
        retry_max_wait: float = 10,
    ) -> None:
        """Initialize the OCR extractor.

        Args:
            base_url: tesseract-server base URL (e.g., http://localhost:8884).
            languages: Language codes for recognition (default: ["eng"]).
            client: Shared httpx.AsyncClient; one is created when omitted.
            timeout: HTTP timeout in seconds for a created client.
            max_attempts: Attempts per request; transport errors are retried.
            retry_max_wait: Upper bound in seconds on the backoff between attempts.

        Raises:
            ValueError: If base_url is empty.
        """
        if not base_url:
            raise ValueError("base_url cannot be empty")

        self.url = f"{base_url.rstrip('/')}/tesseract"
        self.languages = languages or ["eng"]
        self.max_attempts = max_attempts
        self.retry_max_wait = retry_max_wait
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

        logger.info(f"Initialized TesseractOcrExtractor (url={self.url})")

    async def extract_text(self, uploaded: UploadedInput) -> str:
        """Run OCR over the uploaded file and return the trimmed text.

        Raises:
            ExtractionError: On transport failure, non-2xx status, or a malformed body.
        """
        files = {
            "options": (None, json.dumps({"languages": self.languages}), "application/json"),
            "file": (uploaded.file_name, uploaded.file_bytes, uploaded.content_type),
        }

        logger.info(
            "Sending file to OCR service",
            extra={"file_name": uploaded.file_name, "bytes": len(uploaded.file_bytes)},
        )

        try:
            response = await resilient_async_call(
                self._client.post,
                self.url,
                files=files,
                max_attempts=self.max_attempts,
                min_wait=0,
                max_wait=self.retry_max_wait,
                retry_on=(httpx.TransportError,),
            )
            response.raise_for_status()
            parsed = TesseractResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            logger.error("OCR request failed", extra={"url": self.url, "error": str(e)})
            raise ExtractionError(f"OCR request failed: {e}") from e
        except (ValidationError, ValueError) as e:
            logger.error("Malformed OCR response", extra={"url": self.url, "error": str(e)})
            raise ExtractionError(f"Malformed OCR response: {e}") from e

        text = parsed.data.stdout.strip()
        logger.info(
            "OCR completed",
            extra={"file_name": uploaded.file_name, "chars": len(text)},
        )
        return text

    async def aclose(self) -> None:
        """Close the HTTP client if this extractor created it."""
        if self._owns_client:
            await self._client.aclose()


__all__ = ["TesseractOcrExtractor", "TesseractResponse"]
