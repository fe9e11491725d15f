import asyncio

import pytest

from mqtt5core.handler import CancellableHandler, CancellationType


def _recorder():
    calls = []

    def handler(*args):
        calls.append(args)

    return calls, handler


def test_complete_calls_inline():
    calls, handler = _recorder()
    h = CancellableHandler(handler)
    h.complete("ec", [1, 2])
    assert calls == [("ec", [1, 2])]
    assert h.done


def test_complete_twice_raises():
    calls, handler = _recorder()
    h = CancellableHandler(handler)
    h.complete(1)
    with pytest.raises(RuntimeError):
        h.complete(2)
    assert calls == [(1,)]


def test_starts_uncancelled():
    _, handler = _recorder()
    h = CancellableHandler(handler)
    assert h.cancelled == CancellationType.NONE
    assert not h.done


@pytest.mark.parametrize(
    "kind",
    [CancellationType.TERMINAL, CancellationType.PARTIAL, CancellationType.TOTAL],
)
def test_cancel_is_recorded(kind):
    _, handler = _recorder()
    h = CancellableHandler(handler)
    h.cancel(kind)
    assert h.cancelled == kind


def test_terminal_cancel_reaches_on_cancel():
    seen = []
    _, handler = _recorder()
    h = CancellableHandler(handler, on_cancel=seen.append)
    forwarded = h.cancel(CancellationType.TERMINAL)
    assert forwarded == CancellationType.TERMINAL
    assert seen == [CancellationType.TERMINAL]


@pytest.mark.parametrize("kind", [CancellationType.PARTIAL, CancellationType.TOTAL])
def test_non_terminal_cancel_not_forwarded(kind):
    seen = []
    _, handler = _recorder()
    h = CancellableHandler(handler, on_cancel=seen.append)
    assert h.cancel(kind) == CancellationType.NONE
    assert seen == []


def test_cancel_after_complete_is_ignored():
    seen = []
    _, handler = _recorder()
    h = CancellableHandler(handler, on_cancel=seen.append)
    h.complete()
    assert h.cancel(CancellationType.TERMINAL) == CancellationType.NONE
    assert h.cancelled == CancellationType.NONE
    assert seen == []


def test_complete_immediate_without_loop_raises():
    calls, handler = _recorder()
    h = CancellableHandler(handler)
    with pytest.raises(RuntimeError):
        h.complete_immediate(1)
    assert calls == []
    assert not h.done


@pytest.mark.asyncio
async def test_complete_immediate_is_deferred():
    calls, handler = _recorder()
    h = CancellableHandler(handler)
    h.complete_immediate("pid_overrun", ["empty"])
    assert calls == []
    assert h.done
    await asyncio.sleep(0)
    assert calls == [("pid_overrun", ["empty"])]


@pytest.mark.asyncio
async def test_complete_inline_on_own_loop():
    calls, handler = _recorder()
    h = CancellableHandler(handler, loop=asyncio.get_running_loop())
    assert not h.done
    h.complete(7)
    assert h.done
    assert calls == [(7,)]


def test_complete_from_other_thread_posts_to_loop():
    loop = asyncio.new_event_loop()
    try:
        calls, handler = _recorder()
        h = CancellableHandler(handler, loop=loop)
        assert not h.done
        h.complete(3)
        assert h.done
        assert calls == []
        loop.run_until_complete(asyncio.sleep(0))
        assert calls == [(3,)]
    finally:
        loop.close()