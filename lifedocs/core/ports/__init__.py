"""Ports for core use-cases."""

from __future__ import annotations

from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.core.ports.summarizer import DocumentSummarizer
from lifedocs.core.ports.text_extractor import TextExtractor

__all__ = ["DocumentRepository", "DocumentSummarizer", "TextExtractor"]
