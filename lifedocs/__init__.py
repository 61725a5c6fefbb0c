"""LifeDocs - personal document store with OCR extraction and LLM summarization."""

__version__ = "0.1.0"
