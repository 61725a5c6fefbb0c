"""Tests for per-command correlation ids and pipeline stages."""

import asyncio

import pytest

from lifedocs.common.tracing import (
    correlation_scope,
    get_correlation_id,
    get_pipeline_stage,
    pipeline_stage,
)


@pytest.mark.unit
class TestCorrelationScope:
    def test_generates_id_and_restores_on_exit(self) -> None:
        assert get_correlation_id() is None

        with correlation_scope() as cid:
            assert cid
            assert get_correlation_id() == cid

        assert get_correlation_id() is None

    def test_nested_scope_restores_outer_id(self) -> None:
        with correlation_scope("outer"):
            with correlation_scope("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"

    def test_restored_when_block_raises(self) -> None:
        with pytest.raises(RuntimeError):
            with correlation_scope("req-1"):
                raise RuntimeError("command failed")

        assert get_correlation_id() is None

    def test_each_scope_gets_a_fresh_id(self) -> None:
        with correlation_scope() as first:
            pass
        with correlation_scope() as second:
            pass

        assert first != second


@pytest.mark.asyncio
async def test_ids_are_isolated_per_task() -> None:
    async def command(name: str) -> str | None:
        with correlation_scope(name):
            await asyncio.sleep(0)
            return get_correlation_id()

    results = await asyncio.gather(command("a"), command("b"))

    assert results == ["a", "b"]


@pytest.mark.asyncio
async def test_stage_is_inherited_by_child_tasks() -> None:
    async def adapter_call() -> str | None:
        return get_pipeline_stage()

    with pipeline_stage("summarize"):
        seen = await asyncio.wait_for(adapter_call(), timeout=1.0)

    assert seen == "summarize"
    assert get_pipeline_stage() is None
