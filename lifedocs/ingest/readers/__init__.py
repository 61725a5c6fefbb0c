"""Text extractors for uploaded files."""

from lifedocs.ingest.readers.pdf_text import PdfTextLayerExtractor
from lifedocs.ingest.readers.tesseract import TesseractOcrExtractor
from lifedocs.ingest.readers.uploaded_file import UploadedFileTextExtractor

__all__ = ["PdfTextLayerExtractor", "TesseractOcrExtractor", "UploadedFileTextExtractor"]
