"""Summarizers for extracted document text."""

from lifedocs.ingest.summarizers.ollama import OllamaDocumentSummarizer, parse_summary_response

__all__ = ["OllamaDocumentSummarizer", "parse_summary_response"]
