"""
Message adapters between a page context and the host platform.

Hosts deliver reader requests in one of two shapes: dict messages with an
``action`` key that expect a synchronous reply, or named events whose
replies go back as named events. Each shape has an adapter behind the same
narrow interface, and the adapter is picked once at startup.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from .controller import PageContext
from ..models import ToggleResult

logger = logging.getLogger(__name__)

TOGGLE_READER = 'toggleReader'
IS_READER_ACTIVE = 'isReaderActive'
READER_ACTIVE_RESPONSE = 'readerActiveResponse'
READER_STATE_CHANGED = 'readerStateChanged'

Dispatch = Callable[[str, Dict[str, Any]], None]


class MessageAdapter(ABC):
    """Narrow interface the host platform talks to."""

    def __init__(self, context: PageContext):
        self.context = context

    def request_toggle(self) -> ToggleResult:
        """Toggle reader mode and announce the resulting state."""
        result = self.context.toggle()
        self.notify_state_changed(result.active)
        return result

    @abstractmethod
    def notify_state_changed(self, active: bool) -> None:
        """Tell the host the reader state is now ``active``."""


class RuntimeMessageAdapter(MessageAdapter):
    """
    Adapter for hosts that send ``{"action": ...}`` messages and wait for a
    reply.
    """

    def __init__(self, context: PageContext,
                 on_state_changed: Optional[Callable[[Dict[str, Any]], None]] = None):
        super().__init__(context)
        self.on_state_changed = on_state_changed

    def handle(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Handle an incoming message.

        Args:
            message: Message dict with an ``action`` key

        Returns:
            Reply dict, or None for actions this adapter does not handle
        """
        action = message.get('action') if isinstance(message, dict) else None
        if action == TOGGLE_READER:
            return self.request_toggle().to_dict()
        if action == IS_READER_ACTIVE:
            return {'active': self.context.is_active()}

        logger.debug("Ignoring message with action %r", action)
        return None

    def notify_state_changed(self, active: bool) -> None:
        if self.on_state_changed is not None:
            self.on_state_changed({'action': READER_STATE_CHANGED, 'active': active})


class EventMessageAdapter(MessageAdapter):
    """
    Adapter for hosts that deliver named events and read replies from
    events dispatched back to them.
    """

    def __init__(self, context: PageContext, dispatch: Dispatch):
        super().__init__(context)
        self.dispatch = dispatch

    def handle(self, name: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """
        Handle an incoming event.

        Args:
            name: Event name
            payload: Event payload (unused by the reader events)
        """
        if name == TOGGLE_READER:
            self.request_toggle()
        elif name == IS_READER_ACTIVE:
            self.dispatch(READER_ACTIVE_RESPONSE, {'active': self.context.is_active()})
        else:
            logger.debug("Ignoring event %r", name)

    def notify_state_changed(self, active: bool) -> None:
        self.dispatch(READER_ACTIVE_RESPONSE, {'active': active})


def create_message_adapter(kind: str, context: PageContext,
                           dispatch: Optional[Dispatch] = None) -> MessageAdapter:
    """
    Pick the adapter for the host platform.

    Args:
        kind: ``runtime`` or ``event``
        context: Page context the adapter drives
        dispatch: Outbound channel; required for ``event``, optional for
            ``runtime`` where it receives state-change messages

    Returns:
        The adapter instance

    Raises:
        ValueError: If the kind is unknown or ``event`` has no dispatch
    """
    kind = kind.lower()
    if kind == 'runtime':
        on_state_changed = None
        if dispatch is not None:
            def on_state_changed(message):
                dispatch(message['action'], message)
        return RuntimeMessageAdapter(context, on_state_changed)
    if kind == 'event':
        if dispatch is None:
            raise ValueError("Event messaging needs a dispatch callable")
        return EventMessageAdapter(context, dispatch)
    raise ValueError(f"Unknown messaging adapter: {kind}")
