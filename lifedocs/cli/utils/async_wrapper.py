"""Async command wrapper for Typer CLI.

Typer requires synchronous command functions while every LifeDocs use case is async.
Each command also runs under its own correlation id so its log lines can be joined.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

from lifedocs.common.tracing import correlation_scope


def async_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Run an async Typer command to completion in a fresh event loop and correlation scope.

    Usage:
        @app.command()
        @async_command
        async def my_command(arg: str) -> None:
            await async_operation(arg)
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with correlation_scope():
            return asyncio.run(func(*args, **kwargs))

    return wrapper


__all__ = ["async_command"]
