"""Tests for the async Typer command wrapper."""

import pytest

from lifedocs.cli.utils import async_command
from lifedocs.common.tracing import get_correlation_id


@async_command
async def current_correlation_id() -> str | None:
    return get_correlation_id()


@pytest.mark.unit
def test_each_command_gets_its_own_correlation_id() -> None:
    first = current_correlation_id()
    second = current_correlation_id()

    assert first and second
    assert first != second
    assert get_correlation_id() is None


@pytest.mark.unit
def test_scope_closed_when_command_raises() -> None:
    @async_command
    async def failing() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        failing()

    assert get_correlation_id() is None
