"""List documents command for LifeDocs CLI.

Shows one keyset page of an owner's documents and the options that fetch the next one.
"""

from __future__ import annotations

import logging
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from lifedocs.cli.utils import exit_with_error
from lifedocs.common.factories import make_list_documents_use_case
from lifedocs.core.errors import DocumentServiceError
from lifedocs.core.use_cases.list_documents import DocumentPage

console = Console()
logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 60


async def list_documents_command(
    owner: UUID,
    limit: int | None = None,
    after_title: str | None = None,
    after_id: int | None = None,
    as_json: bool = False,
) -> None:
    """List one page of documents.

    Args:
        owner: Owner UUID.
        limit: Page size (default: configured page_size).
        after_title: Title of the last document on the previous page.
        after_id: Id of the last document on the previous page.
        as_json: Print the page as JSON instead of a table.

    Raises:
        typer.Exit: Exit with code 1 on invalid arguments or storage failure.
    """
    try:
        use_case, cleanup = make_list_documents_use_case()
    except DocumentServiceError as err:
        exit_with_error(err)

    try:
        page = await use_case.execute(
            owner_id=owner,
            limit=limit,
            title_cursor=after_title,
            id_cursor=after_id,
        )
    except ValueError as err:
        logger.warning("Rejected listing arguments", extra={"error": str(err)})
        console.print(f"[red]✗ Invalid arguments: {err}[/red]")
        raise typer.Exit(code=1) from err
    except DocumentServiceError as err:
        exit_with_error(err)
    finally:
        await cleanup()

    if as_json:
        console.print_json(page.model_dump_json())
        return

    _print_table(page)


def _print_table(page: DocumentPage) -> None:
    if not page.documents:
        console.print("[yellow]No documents found[/yellow]")
        return

    table = Table(title=f"Documents ({len(page.documents)})")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Content", overflow="fold")
    table.add_column("Tags", style="magenta")

    for document in page.documents:
        preview = document.content
        if len(preview) > _PREVIEW_CHARS:
            preview = preview[: _PREVIEW_CHARS - 3] + "..."
        table.add_row(str(document.id), document.title, preview, ", ".join(document.tags))

    console.print(table)

    if page.next_cursor is not None:
        console.print(
            f"[dim]Next page: --after-title {page.next_cursor.title!r} "
            f"--after-id {page.next_cursor.id}[/dim]"
        )
