"""Ingestion adapters: text extraction and summarization."""
