"""Create document command for LifeDocs CLI.

Thin wrapper over CreateDocumentUseCase: builds the use case from configuration,
reads the optional file, executes and reports the result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console

from lifedocs.cli.utils import exit_with_error
from lifedocs.common.factories import make_create_document_use_case
from lifedocs.core.errors import DocumentServiceError
from lifedocs.schemas.models import UploadedInput

console = Console()
logger = logging.getLogger(__name__)


async def create_document_command(
    owner: UUID,
    title: str | None = None,
    content: str | None = None,
    file: Path | None = None,
    timeout: float | None = None,
) -> None:
    """Create one document and print its id.

    Args:
        owner: Owner UUID.
        title: Title for direct creation.
        content: Content for direct creation.
        file: File whose extracted text is summarized into the document.
        timeout: Per-stage timeout in seconds overriding configuration.

    Raises:
        typer.Exit: Exit with code 1 if the file is unreadable or creation fails.
    """
    uploaded: UploadedInput | None = None
    if file is not None:
        try:
            data = file.read_bytes()
        except OSError as err:
            console.print(f"[red]✗ Cannot read {file}: {err.strerror}[/red]")
            raise typer.Exit(code=1) from err
        uploaded = UploadedInput(file_name=file.name, file_bytes=data, owner_id=owner)
        if title is not None or content is not None:
            console.print("[yellow]--title/--content are ignored when --file is given[/yellow]")
        console.print(f"[yellow]Processing {file.name} ({len(data)} bytes)...[/yellow]")

    try:
        use_case, cleanup = make_create_document_use_case()
    except DocumentServiceError as err:
        exit_with_error(err)

    try:
        document = await use_case.execute(
            owner_id=owner,
            title=title,
            content=content,
            uploaded_file=uploaded,
            timeout=timeout,
        )
    except DocumentServiceError as err:
        exit_with_error(err)
    finally:
        await cleanup()

    logger.info("Created document via CLI", extra={"doc_id": document.id})
    console.print(f"[green]✓ Created document {document.id}[/green]")
    console.print(f"  Title: {document.title}")
    if document.content:
        console.print(f"  Content: {document.content}")
