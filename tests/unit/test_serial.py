"""Unit tests for the process-wide OperationGuard."""

import asyncio

import pytest

from src.rush_common.errors import ReentrantCallError
from src.rush_common.serial import OperationGuard


async def test_nested_run_rejected() -> None:
    guard = OperationGuard()
    async with guard.run("resolve"):
        with pytest.raises(ReentrantCallError) as exc_info:
            async with guard.run("place"):
                pass
    assert "place" in exc_info.value.message
    assert guard.busy is False


async def test_operations_do_not_interleave() -> None:
    guard = OperationGuard()
    events: list[str] = []

    async def op(name: str) -> None:
        async with guard.run(name):
            events.append(f"{name}:start")
            await asyncio.sleep(0)
            events.append(f"{name}:end")

    await asyncio.gather(op("a"), op("b"))
    assert events == ["a:start", "a:end", "b:start", "b:end"]


async def test_released_after_exception() -> None:
    guard = OperationGuard()
    with pytest.raises(RuntimeError):
        async with guard.run("place"):
            raise RuntimeError("boom")
    async with guard.run("place"):
        assert guard.busy is True
