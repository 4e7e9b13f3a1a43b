import asyncio

import pytest

from conftest import SurfaceFactory
from errors import InitializationError
from session import PROBE_SCRIPT, RenderSessionManager, SessionState, build_init_script


def _manager(factory):
    return RenderSessionManager(factory, host_url="https://esm.test", init_script="/* init */")


def test_first_acquire_launches_and_initialises():
    factory = SurfaceFactory()
    manager = _manager(factory)
    assert manager.state is SessionState.ABSENT

    surface = asyncio.run(manager.acquire())

    assert manager.state is SessionState.LIVE
    assert surface is factory.last
    assert surface.url == "https://esm.test"
    assert surface.scripts[0] == "/* init */"


def test_live_session_is_reused_after_probe():
    factory = SurfaceFactory()
    manager = _manager(factory)

    async def twice():
        first = await manager.acquire()
        second = await manager.acquire()
        return first, second

    first, second = asyncio.run(twice())
    assert first is second
    assert len(factory.created) == 1
    assert first.scripts.count("/* init */") == 1
    assert first.scripts[-1] == PROBE_SCRIPT


def test_dead_session_is_replaced_within_the_same_call():
    factory = SurfaceFactory()
    manager = _manager(factory)

    async def scenario():
        first = await manager.acquire()
        first.dead = True
        first.fail_close = True
        second = await manager.acquire()
        return first, second

    first, second = asyncio.run(scenario())
    assert first is not second
    assert first.closed
    assert manager.state is SessionState.LIVE
    assert len(factory.created) == 2


def test_failed_readiness_raises_and_resets_to_absent():
    factory = SurfaceFactory(ready=False)
    manager = _manager(factory)

    with pytest.raises(InitializationError):
        asyncio.run(manager.acquire())

    assert manager.state is SessionState.ABSENT
    assert factory.last.closed

    factory.options["ready"] = True
    asyncio.run(manager.acquire())
    assert manager.state is SessionState.LIVE
    assert len(factory.created) == 2


def test_launch_failure_is_wrapped():
    manager = _manager(SurfaceFactory(fail_launch=True))
    with pytest.raises(InitializationError, match="Executable doesn't exist"):
        asyncio.run(manager.acquire())
    assert manager.state is SessionState.ABSENT


def test_shutdown_is_idempotent_and_swallows_close_errors():
    factory = SurfaceFactory()
    manager = _manager(factory)

    async def scenario():
        surface = await manager.acquire()
        surface.fail_close = True
        await manager.shutdown()
        await manager.shutdown()

    asyncio.run(scenario())
    assert factory.last.closed
    assert manager.state is SessionState.ABSENT

    asyncio.run(_manager(SurfaceFactory()).shutdown())


def test_init_script_is_templated():
    script = build_init_script("https://cdn.test/excalidraw.js", 250, 20)
    assert 'import("https://cdn.test/excalidraw.js")' in script
    assert "setTimeout(r, 250)" in script
    assert "exportPadding: 20" in script
    assert "regenerateIds: false" in script
    assert "%" not in script


def test_lock_follows_the_running_event_loop():
    manager = _manager(SurfaceFactory())

    async def grab():
        lock = manager.lock()
        assert manager.lock() is lock
        async with lock:
            pass
        return lock

    first = asyncio.run(grab())
    second = asyncio.run(grab())
    assert first is not second
