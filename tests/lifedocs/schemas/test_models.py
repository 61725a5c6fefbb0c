"""Tests for the LifeDocs data models."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from lifedocs.schemas.models import Document, PageCursor, SummaryResult, UploadedInput


@pytest.mark.unit
class TestDocument:
    def test_new_document_is_unsaved(self) -> None:
        owner = uuid4()
        doc = Document.new("Lease", "Signed in May", owner)

        assert doc.id == 0
        assert not doc.is_persisted
        assert doc.tags == []
        assert doc.owner_id == owner

    def test_identity_fields_are_immutable(self) -> None:
        doc = Document(id=3, title="Lease", content="x", owner_id=uuid4())

        with pytest.raises(ValidationError):
            doc.title = "Other"
        with pytest.raises(ValidationError):
            doc.id = 4
        with pytest.raises(ValidationError):
            doc.owner_id = uuid4()

    def test_replace_content_overwrites_body(self) -> None:
        doc = Document.new("Lease", "old", uuid4())
        doc.replace_content("new")
        assert doc.content == "new"

    def test_negative_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document(id=-1, title="t", content="c", owner_id=uuid4())

    def test_cursor_points_at_document(self) -> None:
        doc = Document(id=7, title="B", content="", owner_id=uuid4())
        assert doc.cursor() == PageCursor(title="B", id=7)

    @pytest.mark.parametrize(
        ("title", "content"),
        [
            ("", ""),
            ("t\x00\x07\u00e9\U0001F600", "line\r\n\x1b[0m\ttab"),
            ("\u0645\u0633\u062a\u0646\u062f", "\x00ab " * 1_000_000),
        ],
        ids=["empty", "control-and-emoji", "rtl-and-4mb"],
    )
    def test_accepts_any_text_unchanged(self, title, content) -> None:
        doc = Document.new(title, content, uuid4())

        assert doc.title == title
        assert doc.content == content
        assert doc.cursor().title == title


@pytest.mark.unit
class TestUploadedInput:
    @pytest.mark.parametrize(
        ("file_name", "extension", "pdf", "ocr"),
        [
            ("scan.PNG", "png", False, True),
            ("lease.pdf", "pdf", True, False),
            ("LEASE.PDF", "pdf", True, False),
            ("photo.jpeg", "jpeg", False, True),
            ("notes.txt", "txt", False, False),
            ("README", "", False, False),
            ("archive.tar.gz", "gz", False, False),
        ],
    )
    def test_classification(self, file_name, extension, pdf, ocr) -> None:
        upload = UploadedInput(file_name=file_name, file_bytes=b"x", owner_id=uuid4())

        assert upload.extension == extension
        assert upload.is_pdf() is pdf
        assert upload.is_ocr_eligible() is ocr

    def test_content_type(self) -> None:
        owner = uuid4()
        assert UploadedInput(file_name="a.jpg", file_bytes=b"x", owner_id=owner).content_type == "image/jpeg"
        assert (
            UploadedInput(file_name="a.bin", file_bytes=b"x", owner_id=owner).content_type
            == "application/octet-stream"
        )

    def test_is_immutable_and_hides_bytes_in_repr(self) -> None:
        upload = UploadedInput(file_name="a.png", file_bytes=b"secret-bytes", owner_id=uuid4())

        with pytest.raises(ValidationError):
            upload.file_name = "b.png"
        assert "secret-bytes" not in repr(upload)


@pytest.mark.unit
def test_summary_result_is_frozen() -> None:
    result = SummaryResult(summary="s", title="t")
    with pytest.raises(ValidationError):
        result.title = "other"
