"""Plain-text extraction for uploaded statement files."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

import structlog

from statement_ingest.domain.errors import UnsupportedDocumentError

logger = structlog.get_logger(__name__)

TEXT_SUFFIXES = frozenset({".txt", ".md", ".markdown", ""})
BINARY_SUFFIXES = frozenset({".pdf", ".docx", ".html", ".htm"})


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


class PlainTextExtractor:
    """Decodes text and markdown uploads as UTF-8.

    Binary formats need an upstream converter and are rejected here.
    """

    def extract(self, content: bytes, filename: str) -> str:
        suffix = Path(filename or "").suffix.lower()
        if suffix in BINARY_SUFFIXES:
            raise UnsupportedDocumentError(
                f"{filename!r} must be converted to text before ingestion"
            )
        if suffix not in TEXT_SUFFIXES:
            logger.info("extract_unknown_suffix", filename=filename, suffix=suffix)
        text = content.decode("utf-8-sig", errors="replace")
        logger.debug("text_extracted", filename=filename, chars=len(text))
        return text
