"""
Page-context controller for inky-reader.

One ``PageContext`` exists per top-level page. It owns that page's reader
session (created on first use), schedules the deferred activation after a
page load, and reacts to navigation notifications.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .notifier import Notifier
from .page_view import PageView
from .session import ReaderSession
from .state_store import StateStore
from ..config import Config, DEFAULT_ACTIVATION_DELAY, get_config
from ..extractors.extractor_factory import ExtractorFactory
from ..models import ToggleResult
from ..utils import is_http_url

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Runs a callback once after a fixed delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` to run after ``delay`` seconds."""


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.loop.call_later(delay, callback)


class BlockingScheduler(Scheduler):
    """Waits out the delay in place, then runs the callback."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        time.sleep(delay)
        callback()


class PageContext:
    """
    Controller for a single page.

    Replaces a process-wide "already loaded" flag: whoever owns the page
    owns this object, and through it the page's only ReaderSession.
    """

    def __init__(self, page_view: PageView,
                 config: Optional[Config] = None,
                 factory: Optional[ExtractorFactory] = None,
                 notifier: Optional[Notifier] = None,
                 state_store: Optional[StateStore] = None,
                 scheduler: Optional[Scheduler] = None):
        """
        Initialize the page context.

        Args:
            page_view: The page being controlled
            config: Configuration (global config if None)
            factory: Extraction engines (built from config if None)
            notifier: Status message channel
            state_store: Persisted reader flag
            scheduler: Runs deferred activation (blocking if None)
        """
        self.page_view = page_view
        self.config = config if config is not None else get_config()
        self.factory = factory if factory is not None else ExtractorFactory(self.config)
        self.notifier = notifier
        self.state_store = state_store
        self.scheduler = scheduler or BlockingScheduler()
        delay = self.config.get_reader_config().get('activation_delay')
        self.activation_delay = float(delay) if delay is not None else DEFAULT_ACTIVATION_DELAY

        self.closed = False
        self._session: Optional[ReaderSession] = None

    @property
    def session(self) -> ReaderSession:
        """The page's reader session, created on first use."""
        if self._session is None:
            self._session = ReaderSession(
                self.page_view,
                self.factory,
                notifier=self.notifier,
                state_store=self.state_store,
                messages=self.config.get_messages()
            )
        return self._session

    def toggle(self) -> ToggleResult:
        return self.session.toggle()

    def is_active(self) -> bool:
        return self._session is not None and self._session.is_active()

    def on_load(self, was_active: bool) -> bool:
        """
        Activation-on-load hook.

        Args:
            was_active: Persisted flag supplied by the caller

        Returns:
            True if a deferred activation was scheduled
        """
        if not was_active:
            return False

        logger.debug("Scheduling reader activation in %.1fs", self.activation_delay)
        self.scheduler.call_later(self.activation_delay, self._deferred_activation)
        return True

    def on_navigation_completed(self, url: str) -> bool:
        """
        Re-apply reader mode after a navigation finished.

        Non-http pages are ignored.

        Args:
            url: Address the page navigated to

        Returns:
            True if a deferred activation was scheduled
        """
        if not is_http_url(url):
            logger.debug("Ignoring navigation to %s", url)
            return False
        if self.state_store is None:
            return False
        return self.on_load(self.state_store.get_reader_active())

    def close(self) -> None:
        """Mark the page as gone; pending activations become no-ops."""
        self.closed = True

    def _deferred_activation(self) -> None:
        if self.closed:
            logger.debug("Page context closed, skipping deferred activation")
            return
        self.session.ensure_active()
