"""docextract ─ plain-text extraction service for PDF, DOCX, TXT and ZIP uploads."""

__version__ = "0.1.0"
