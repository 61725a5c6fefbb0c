"""Uniform reporting of tagged service errors for CLI commands."""

from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console

from lifedocs.core.errors import DocumentServiceError

console = Console()
logger = logging.getLogger(__name__)


def exit_with_error(err: DocumentServiceError) -> NoReturn:
    """Print ``code: user_message`` and exit 1. Internal detail goes to the log only."""
    logger.error("Command failed", extra={"code": err.code, "detail": str(err)})
    console.print(f"[red]✗ {err.code}: {err.user_message}[/red]")
    raise typer.Exit(code=1) from err


__all__ = ["exit_with_error"]
