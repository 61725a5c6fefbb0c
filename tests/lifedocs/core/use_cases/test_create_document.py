"""Tests for CreateDocumentUseCase.

Covers the direct and upload branches, stage error mapping, timeouts and the
all-or-nothing guarantee (nothing is stored when any stage fails).
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from lifedocs.common.tracing import get_pipeline_stage
from lifedocs.core.errors import ExtractionError, PersistenceError, SummarizationError
from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.core.use_cases.create_document import CreateDocumentUseCase
from lifedocs.schemas.models import Document, UploadedInput


@pytest.fixture
def use_case(repository, mock_extractor, mock_summarizer) -> CreateDocumentUseCase:
    return CreateDocumentUseCase(
        repository=repository,
        extractor=mock_extractor,
        summarizer=mock_summarizer,
        extraction_timeout=1.0,
        summarization_timeout=1.0,
    )


class TestDirectCreation:
    @pytest.mark.asyncio
    async def test_stores_given_title_and_content(
        self, use_case, repository, owner_id, mock_extractor, mock_summarizer
    ) -> None:
        doc = await use_case.execute(owner_id=owner_id, title="Lease", content="Signed")

        assert doc.id > 0
        assert (doc.title, doc.content, doc.owner_id) == ("Lease", "Signed", owner_id)
        assert await repository.get(doc.id) == doc
        mock_extractor.extract_text.assert_not_awaited()
        mock_summarizer.summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_fields_become_empty(self, use_case, owner_id) -> None:
        doc = await use_case.execute(owner_id=owner_id)
        assert (doc.title, doc.content) == ("", "")

    @pytest.mark.asyncio
    async def test_empty_upload_takes_direct_branch(
        self, use_case, owner_id, mock_extractor
    ) -> None:
        empty = UploadedInput(file_name="blank.png", file_bytes=b"", owner_id=owner_id)

        doc = await use_case.execute(owner_id=owner_id, title="T", uploaded_file=empty)

        assert doc.title == "T"
        mock_extractor.extract_text.assert_not_awaited()


class TestUploadCreation:
    @pytest.mark.asyncio
    async def test_summary_becomes_document(
        self, use_case, repository, owner_id, png_upload, mock_extractor, mock_summarizer
    ) -> None:
        doc = await use_case.execute(
            owner_id=owner_id, title="ignored", content="ignored", uploaded_file=png_upload
        )

        assert (doc.title, doc.content) == ("Rent", "Monthly rent schedule.")
        mock_extractor.extract_text.assert_awaited_once_with(png_upload)
        mock_summarizer.summarize.assert_awaited_once_with(
            "Rent is due on the first of every month."
        )
        assert await repository.count() == 1

    @pytest.mark.asyncio
    async def test_extraction_failure_stores_nothing(
        self, use_case, repository, owner_id, png_upload, mock_extractor, mock_summarizer
    ) -> None:
        mock_extractor.extract_text.side_effect = ExtractionError("OCR request failed")

        with pytest.raises(ExtractionError):
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)

        mock_summarizer.summarize.assert_not_awaited()
        assert await repository.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \n\t"])
    async def test_blank_text_is_extraction_error(
        self, use_case, repository, owner_id, png_upload, mock_extractor, mock_summarizer, text
    ) -> None:
        mock_extractor.extract_text.return_value = text

        with pytest.raises(ExtractionError):
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)

        mock_summarizer.summarize.assert_not_awaited()
        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_summarization_failure_stores_nothing(
        self, use_case, repository, owner_id, png_upload, mock_summarizer
    ) -> None:
        mock_summarizer.summarize.side_effect = SummarizationError("Ollama error")

        with pytest.raises(SummarizationError):
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)

        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_unexpected_extractor_exception_is_wrapped(
        self, use_case, owner_id, png_upload, mock_extractor
    ) -> None:
        mock_extractor.extract_text.side_effect = RuntimeError("segfault in OCR")

        with pytest.raises(ExtractionError) as exc_info:
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_unexpected_summarizer_exception_is_wrapped(
        self, use_case, owner_id, png_upload, mock_summarizer
    ) -> None:
        mock_summarizer.summarize.side_effect = KeyError("response")

        with pytest.raises(SummarizationError) as exc_info:
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)
        assert isinstance(exc_info.value.__cause__, KeyError)


class TestTimeouts:
    @pytest.mark.asyncio
    async def test_slow_extraction_times_out(
        self, use_case, repository, owner_id, png_upload, mock_extractor
    ) -> None:
        async def slow(_uploaded):
            await asyncio.sleep(5)
            return "late"

        mock_extractor.extract_text.side_effect = slow

        with pytest.raises(ExtractionError, match="timed out") as exc_info:
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload, timeout=0.05)
        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_slow_summarization_uses_configured_timeout(
        self, repository, owner_id, png_upload, mock_extractor, mock_summarizer
    ) -> None:
        async def slow(_text):
            await asyncio.sleep(5)

        mock_summarizer.summarize.side_effect = slow
        use_case = CreateDocumentUseCase(
            repository=repository,
            extractor=mock_extractor,
            summarizer=mock_summarizer,
            extraction_timeout=1.0,
            summarization_timeout=0.05,
        )

        with pytest.raises(SummarizationError, match="timed out"):
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)
        assert await repository.count() == 0


class TestPersistence:
    @pytest.mark.asyncio
    async def test_persistence_error_propagates(
        self, mock_extractor, mock_summarizer, owner_id
    ) -> None:
        repository = AsyncMock(spec=DocumentRepository)
        repository.save.side_effect = PersistenceError("disk full")
        use_case = CreateDocumentUseCase(repository, mock_extractor, mock_summarizer)

        with pytest.raises(PersistenceError, match="disk full"):
            await use_case.execute(owner_id=owner_id, title="A", content="B")

    @pytest.mark.asyncio
    async def test_exactly_one_save(self, mock_extractor, mock_summarizer, png_upload) -> None:
        owner = png_upload.owner_id
        repository = AsyncMock(spec=DocumentRepository)
        repository.save.return_value = Document(id=1, title="Rent", content="x", owner_id=owner)
        use_case = CreateDocumentUseCase(repository, mock_extractor, mock_summarizer)

        await use_case.execute(owner_id=owner, uploaded_file=png_upload)

        repository.save.assert_awaited_once()
        stored = repository.save.call_args.args[0]
        assert stored.id == 0
        assert stored.owner_id == owner

    @pytest.mark.asyncio
    async def test_documents_belong_to_caller(self, use_case) -> None:
        first, second = uuid4(), uuid4()
        a = await use_case.execute(owner_id=first, title="A")
        b = await use_case.execute(owner_id=second, title="A")

        assert a.owner_id == first
        assert b.owner_id == second
        assert a.id != b.id


class TestOwnership:
    @pytest.mark.asyncio
    async def test_upload_from_another_owner_rejected(
        self, use_case, repository, other_owner_id, png_upload, mock_extractor
    ) -> None:
        with pytest.raises(ValueError, match="belongs to owner"):
            await use_case.execute(owner_id=other_owner_id, uploaded_file=png_upload)

        mock_extractor.extract_text.assert_not_awaited()
        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_empty_upload_from_another_owner_rejected(
        self, use_case, repository, owner_id, other_owner_id
    ) -> None:
        empty = UploadedInput(file_name="blank.png", file_bytes=b"", owner_id=other_owner_id)

        with pytest.raises(ValueError):
            await use_case.execute(owner_id=owner_id, title="T", uploaded_file=empty)
        assert await repository.count() == 0


class TestPipelineStages:
    @pytest.mark.asyncio
    async def test_each_port_runs_under_its_stage(
        self, owner_id, png_upload, mock_extractor, mock_summarizer
    ) -> None:
        seen: list[str | None] = []
        mock_extractor.extract_text.side_effect = lambda upload: (
            seen.append(get_pipeline_stage()) or "Rent is due."
        )
        summary = mock_summarizer.summarize.return_value
        mock_summarizer.summarize.side_effect = lambda text: (
            seen.append(get_pipeline_stage()) or summary
        )
        repository = AsyncMock(spec=DocumentRepository)
        repository.save.side_effect = lambda doc: (
            seen.append(get_pipeline_stage())
            or Document(id=1, title="Rent", content="x", owner_id=owner_id)
        )
        use_case = CreateDocumentUseCase(repository, mock_extractor, mock_summarizer)

        await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)

        assert seen == ["extract", "summarize", "persist"]
        assert get_pipeline_stage() is None

    @pytest.mark.asyncio
    async def test_stage_cleared_after_failure(
        self, use_case, owner_id, png_upload, mock_extractor
    ) -> None:
        mock_extractor.extract_text.side_effect = ExtractionError("bad scan")

        with pytest.raises(ExtractionError):
            await use_case.execute(owner_id=owner_id, uploaded_file=png_upload)

        assert get_pipeline_stage() is None
