"""LifeDocs CLI - Typer command-line interface for document management."""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

import typer

from lifedocs.cli.commands import documents_app
from lifedocs.cli.utils import async_command
from lifedocs.common.logging import setup_logging

app = typer.Typer(
    name="lifedocs",
    help="LifeDocs CLI - personal document store with OCR and summarization",
    add_completion=False,
)
logger = logging.getLogger(__name__)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Configure JSON logging for this invocation."""
    setup_logging(log_level)


# Register documents subcommand group with commands
@documents_app.command(name="create")
@async_command
async def documents_create(
    owner: UUID = typer.Option(..., "--owner", "-o", help="Owner UUID"),
    title: str | None = typer.Option(None, "--title", "-t", help="Document title"),
    content: str | None = typer.Option(None, "--content", "-c", help="Document content"),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="PDF or image to extract, summarize and store"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-stage timeout in seconds for extraction and summarization"
    ),
) -> None:
    """
    Create a document directly or from a file.

    With --file the text is extracted (PDF text layer, else OCR) and summarized;
    the summary becomes the content and the generated title the title.

    Examples:
        lifedocs documents create --owner <uuid> --title "Lease" --content "Signed 2024"
        lifedocs documents create --owner <uuid> --file scan.png
    """
    from lifedocs.cli.commands.create_document import create_document_command

    await create_document_command(
        owner=owner, title=title, content=content, file=file, timeout=timeout
    )


@documents_app.command(name="get")
@async_command
async def documents_get(
    doc_id: int = typer.Argument(..., help="Document id"),
) -> None:
    """
    Show one document.

    Examples:
        lifedocs documents get 42
    """
    from lifedocs.cli.commands.get_document import get_document_command

    await get_document_command(doc_id=doc_id)


@documents_app.command(name="list")
@async_command
async def documents_list(
    owner: UUID = typer.Option(..., "--owner", "-o", help="Owner UUID"),
    limit: int | None = typer.Option(None, "--limit", "-l", help="Page size"),
    after_title: str | None = typer.Option(
        None, "--after-title", help="Title of the last document of the previous page"
    ),
    after_id: int | None = typer.Option(
        None, "--after-id", help="Id of the last document of the previous page"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the page as JSON"),
) -> None:
    """
    List an owner's documents ordered by title, then id.

    Examples:
        lifedocs documents list --owner <uuid>
        lifedocs documents list --owner <uuid> --limit 20 --after-title "Lease" --after-id 7
    """
    from lifedocs.cli.commands.list_documents import list_documents_command

    await list_documents_command(
        owner=owner,
        limit=limit,
        after_title=after_title,
        after_id=after_id,
        as_json=as_json,
    )


app.add_typer(documents_app, name="documents")


if __name__ == "__main__":
    app()
