from io import BytesIO
from pathlib import Path

import pytest

from statement_ingest.domain.errors import UnsupportedDocumentError
from statement_ingest.infrastructure.extraction.text_extractor import PlainTextExtractor, ensure_bytes


def test_decodes_markdown_and_text():
    extractor = PlainTextExtractor()

    assert extractor.extract("**Depot:** Ä1\n".encode("utf-8"), "statement.md") == "**Depot:** Ä1\n"
    assert extractor.extract("\ufeffabc".encode("utf-8"), "statement.TXT") == "abc"


@pytest.mark.parametrize("filename", ["statement.pdf", "statement.docx", "statement.html"])
def test_rejects_binary_formats(filename: str):
    with pytest.raises(UnsupportedDocumentError):
        PlainTextExtractor().extract(b"...", filename)


def test_ensure_bytes(tmp_path: Path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"abc")

    assert ensure_bytes(b"abc") == b"abc"
    assert ensure_bytes(BytesIO(b"abc")) == b"abc"
    assert ensure_bytes(path) == b"abc"
    with pytest.raises(TypeError):
        ensure_bytes("abc")  # type: ignore[arg-type]
