"""
User feedback channels for reader mode status messages.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Surfaces short, transient status messages to the user."""

    @abstractmethod
    def notify(self, text: str) -> None:
        """Show a status message."""


class LoggingNotifier(Notifier):
    """Writes status messages to the log."""

    def notify(self, text: str) -> None:
        logger.info("%s", text)


class ConsoleNotifier(Notifier):
    """Prints status messages to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def notify(self, text: str) -> None:
        self.console.print(f"[bold]{text}[/bold]")
