import asyncio

import pytest

from reconciler.application.services.correlation_lock import CorrelationLock
from reconciler.domain.errors import TransientStorageError


@pytest.mark.asyncio
async def test_same_key_is_serialized():
    lock = CorrelationLock(timeout_seconds=1.0)
    order = []

    async def worker(name):
        async with lock.hold("pi_1"):
            order.append(f"{name}-start")
            await asyncio.sleep(0.01)
            order.append(f"{name}-end")

    await asyncio.gather(worker("a"), worker("b"))

    assert order in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )


@pytest.mark.asyncio
async def test_different_keys_run_concurrently():
    lock = CorrelationLock(timeout_seconds=1.0)
    inside = asyncio.Event()

    async def holder():
        async with lock.hold("pi_1"):
            await asyncio.wait_for(inside.wait(), timeout=1.0)

    async def other():
        async with lock.hold("pi_2"):
            inside.set()

    await asyncio.gather(holder(), other())


@pytest.mark.asyncio
async def test_acquire_timeout_raises_transient_error():
    lock = CorrelationLock(timeout_seconds=0.05)
    release = asyncio.Event()

    async def holder():
        async with lock.hold("pi_1"):
            await release.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)
    assert lock.is_locked("pi_1")

    with pytest.raises(TransientStorageError):
        async with lock.hold("pi_1"):
            pass

    release.set()
    await task


@pytest.mark.asyncio
async def test_locks_are_released_and_dropped():
    lock = CorrelationLock()

    async with lock.hold("pi_1"):
        assert lock.is_locked("pi_1")

    assert not lock.is_locked("pi_1")
    assert lock._locks == {}


@pytest.mark.asyncio
async def test_none_key_does_not_lock():
    lock = CorrelationLock()

    async with lock.hold(None):
        assert lock._locks == {}
