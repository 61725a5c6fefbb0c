"""CLI utilities."""

from lifedocs.cli.utils.async_wrapper import async_command
from lifedocs.cli.utils.errors import exit_with_error

__all__ = ["async_command", "exit_with_error"]
