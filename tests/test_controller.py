import asyncio

from conftest import FakePageView
from inky_reader.reader.controller import AsyncioScheduler, PageContext
from inky_reader.reader.state_store import MemoryStateStore


def _context(config, scheduler, notifier, **kwargs):
    return PageContext(FakePageView(), config=config, notifier=notifier,
                       scheduler=scheduler, **kwargs)


def test_session_created_lazily(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)

    assert context.is_active() is False
    assert context._session is None

    context.toggle()

    assert context._session is not None
    assert context.is_active() is True


def test_session_is_reused(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)

    assert context.session is context.session


def test_on_load_without_persisted_state(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)

    assert context.on_load(False) is False
    assert scheduler.pending == []


def test_on_load_schedules_deferred_activation(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)

    assert context.on_load(True) is True
    assert [delay for delay, _ in scheduler.pending] == [1.0]
    assert context.is_active() is False

    scheduler.run_all()

    assert context.is_active() is True


def test_deferred_activation_after_close_is_noop(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)
    context.on_load(True)

    context.close()
    scheduler.run_all()

    assert context.is_active() is False
    assert notifier.messages == []


def test_deferred_activation_keeps_active_session(config, scheduler, notifier):
    context = _context(config, scheduler, notifier)
    context.on_load(True)
    context.toggle()

    scheduler.run_all()

    assert context.is_active() is True
    assert len(context.page_view.presented) == 1


def test_navigation_ignores_non_http_pages(config, scheduler, notifier):
    context = _context(config, scheduler, notifier, state_store=MemoryStateStore(True))

    assert context.on_navigation_completed("chrome://newtab") is False
    assert context.on_navigation_completed("") is False
    assert scheduler.pending == []


def test_navigation_reapplies_persisted_state(config, scheduler, notifier):
    store = MemoryStateStore(True)
    context = _context(config, scheduler, notifier, state_store=store)

    assert context.on_navigation_completed("https://example.com/next") is True
    scheduler.run_all()

    assert context.is_active() is True


def test_navigation_without_persisted_state(config, scheduler, notifier):
    context = _context(config, scheduler, notifier, state_store=MemoryStateStore(False))

    assert context.on_navigation_completed("https://example.com/next") is False


def test_asyncio_scheduler_runs_deferred_activation(config, notifier):
    config.set("reader.activation_delay", 0)
    loop = asyncio.new_event_loop()
    try:
        context = _context(config, AsyncioScheduler(loop), notifier)
        context.on_load(True)

        loop.run_until_complete(asyncio.sleep(0.01))

        assert context.is_active() is True
    finally:
        loop.close()


def test_null_activation_delay_uses_default(config, scheduler, notifier):
    config.set("reader.activation_delay", None)
    context = _context(config, scheduler, notifier)

    context.on_load(True)

    assert [delay for delay, _ in scheduler.pending] == [1.0]


def test_activation_delay_read_from_reader_config(config, scheduler, notifier):
    config.set("reader.activation_delay", "0.5")

    assert _context(config, scheduler, notifier).activation_delay == 0.5
