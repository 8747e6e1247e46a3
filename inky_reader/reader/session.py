"""
Reader mode state machine.

A ``ReaderSession`` belongs to exactly one page. It decides when to enter and
leave reader mode, runs extraction against a throwaway snapshot, drives the
page view, and guarantees the original page comes back on exit.

States are ``Inactive`` (initial) and ``Active``. Every transition finishes
before ``toggle`` returns, so no intermediate state is ever observable.
"""

import logging
from typing import Dict, Optional

from .notifier import Notifier, LoggingNotifier
from .page_view import PageView
from .state_store import StateStore
from ..config import get_config
from ..exceptions import ComponentUnavailable
from ..extractors.extractor_factory import ExtractorFactory
from ..models import Article, SavedPageState, ToggleResult

logger = logging.getLogger(__name__)


class ReaderSession:
    """
    Per-page reader mode session.

    Failures never escape ``toggle``: they become a notification and a
    ``ToggleResult`` with ``success=False``. A failed activation leaves the
    page exactly as it was.
    """

    def __init__(self, page_view: PageView,
                 factory: Optional[ExtractorFactory],
                 notifier: Optional[Notifier] = None,
                 state_store: Optional[StateStore] = None,
                 messages: Optional[Dict[str, str]] = None):
        """
        Initialize the session.

        Args:
            page_view: The page this session presents into
            factory: Extraction engines; None means they failed to load
            notifier: Where status messages go (logged if None)
            state_store: Persisted reader flag, if any
            messages: Status message texts (from config if None)
        """
        self.page_view = page_view
        self.factory = factory
        self.notifier = notifier or LoggingNotifier()
        self.state_store = state_store
        self.messages = messages if messages is not None else get_config().get_messages()

        self.active = False
        self.saved_state: Optional[SavedPageState] = None
        self.current_article: Optional[Article] = None

    def is_active(self) -> bool:
        return self.active

    def toggle(self) -> ToggleResult:
        """
        Flip reader mode.

        Returns:
            ToggleResult with the outcome and the state after the call
        """
        if self.active:
            return self._deactivate()
        return self._activate()

    def ensure_active(self) -> ToggleResult:
        """Enter reader mode unless it is already active."""
        if self.active:
            return ToggleResult(success=True, active=True)
        return self._activate()

    def _activate(self) -> ToggleResult:
        if self.factory is None:
            logger.error("Reader mode components not loaded")
            return self._fail('unavailable')

        captured = False
        if self.saved_state is None:
            try:
                self.saved_state = self.page_view.capture_state()
            except Exception as e:
                logger.error("Could not save original page: %s", e, exc_info=True)
                return self._fail('init_failed')
            captured = True

        try:
            result = self.factory.extract(self.page_view.snapshot())
        except ComponentUnavailable as e:
            logger.error("Reader mode components not loaded: %s", e)
            self._release_saved_state(captured)
            return self._fail('unavailable')
        except Exception as e:
            logger.error("Snapshot extraction failed: %s", e, exc_info=True)
            self._release_saved_state(captured)
            return self._fail('extraction_failed')

        if result.failed:
            logger.info("Content extraction failed: %s", result.error_message)
            self._release_saved_state(captured)
            return self._fail('extraction_failed')

        try:
            self.page_view.present(result.article)
        except Exception as e:
            logger.error("Reader mode error: %s", e, exc_info=True)
            self._safe_restore(self.saved_state)
            self._release_saved_state(captured)
            return self._fail('init_failed')

        self.current_article = result.article
        self.active = True
        self._persist(True)
        self._notify('enabled')
        logger.info("Reader mode enabled using %s extractor", result.extractor_used)
        return ToggleResult(success=True, active=True)

    def _deactivate(self) -> ToggleResult:
        self._safe_restore(self.saved_state)

        self.active = False
        self.current_article = None
        self.saved_state = None
        self._persist(False)
        self._notify('disabled')
        logger.info("Reader mode disabled")
        return ToggleResult(success=True, active=False)

    def _safe_restore(self, state: Optional[SavedPageState]) -> None:
        if state is None:
            return
        try:
            self.page_view.restore(state)
        except Exception as e:
            logger.warning("Error restoring original page: %s", e)

    def _release_saved_state(self, captured: bool) -> None:
        if captured:
            self.saved_state = None

    def _persist(self, active: bool) -> None:
        if self.state_store is None:
            return
        try:
            self.state_store.set_reader_active(active)
        except Exception as e:
            logger.warning("Could not persist reader state: %s", e)

    def _notify(self, key: str) -> None:
        text = self.messages.get(key)
        if not text:
            return
        try:
            self.notifier.notify(text)
        except Exception as e:
            logger.warning("Could not show status message: %s", e)

    def _fail(self, key: str) -> ToggleResult:
        self._notify(key)
        return ToggleResult(success=False, active=self.active)
