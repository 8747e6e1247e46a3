"""
Reader mode for inky-reader.

This package holds the per-page session state machine, the page views it
mutates, and the collaborators it talks to.
"""

from .controller import PageContext
from .page_view import PageView, HtmlPageView
from .session import ReaderSession

__all__ = ["PageContext", "PageView", "HtmlPageView", "ReaderSession"]
