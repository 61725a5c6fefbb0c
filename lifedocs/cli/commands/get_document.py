"""Get document command for LifeDocs CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from lifedocs.cli.utils import exit_with_error
from lifedocs.common.factories import make_get_document_use_case
from lifedocs.core.errors import DocumentServiceError

console = Console()


async def get_document_command(doc_id: int) -> None:
    """Print one document, or exit 1 with "not found".

    Raises:
        typer.Exit: Exit with code 1 if the document is missing or the lookup fails.
    """
    try:
        use_case, cleanup = make_get_document_use_case()
    except DocumentServiceError as err:
        exit_with_error(err)

    try:
        document = await use_case.execute(doc_id)
    except DocumentServiceError as err:
        exit_with_error(err)
    finally:
        await cleanup()

    if document is None:
        console.print(f"[yellow]Document {doc_id} not found[/yellow]")
        raise typer.Exit(code=1)

    tags = ", ".join(document.tags) if document.tags else "-"
    console.print(
        Panel(
            f"{document.content}\n\n[dim]owner: {document.owner_id} | tags: {tags}[/dim]",
            title=f"[bold cyan]#{document.id} {document.title}[/bold cyan]",
            expand=False,
        )
    )
