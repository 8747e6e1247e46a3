"""
Page views for inky-reader.

A page view is the only thing the reader session mutates. ``HtmlPageView``
works on an in-memory document; tests substitute a fake.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup

from .reading_view import (
    READER_ELEMENT_IDS,
    PAGE_FILTER_STYLE_ID,
    build_reading_view,
    page_filter_css,
)
from ..config import DEFAULT_PAGE_FILTER
from ..extractors.snapshot import DocumentSnapshot, HTML_PARSER
from ..models import Article, SavedPageState

logger = logging.getLogger(__name__)


class PageView(ABC):
    """Mutation surface of a page shown to the user."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Current page title."""

    @abstractmethod
    def capture_state(self) -> SavedPageState:
        """Serialize the page as it is now."""

    @abstractmethod
    def snapshot(self) -> DocumentSnapshot:
        """Take an isolated copy of the page for extraction."""

    @abstractmethod
    def present(self, article: Article) -> None:
        """Replace the visible page with a reading view of the article."""

    @abstractmethod
    def restore(self, state: SavedPageState) -> None:
        """Remove the reading view and put the saved title back."""

    @abstractmethod
    def has_reader_artifacts(self) -> bool:
        """Check whether any reading view element is still in the page."""


class HtmlPageView(PageView):
    """
    Page view over a live BeautifulSoup document.

    ``present`` appends the reading view to <body> and a filter stylesheet to
    the document root; ``restore`` removes each of them independently.
    """

    def __init__(self, document: BeautifulSoup, url: Optional[str] = None,
                 page_filter: Optional[str] = DEFAULT_PAGE_FILTER):
        """
        Initialize the page view.

        Args:
            document: Live document to present into
            url: Address of the page, if known
            page_filter: CSS filter applied to the whole page while reading
        """
        self.document = document
        self.url = url
        self.page_filter = page_filter if page_filter is not None else DEFAULT_PAGE_FILTER

    @classmethod
    def from_html(cls, html: str, url: Optional[str] = None,
                  page_filter: Optional[str] = DEFAULT_PAGE_FILTER) -> 'HtmlPageView':
        """Parse markup into a live page view."""
        return cls(BeautifulSoup(html, HTML_PARSER), url=url, page_filter=page_filter)

    @property
    def title(self) -> str:
        if self.document.title is None:
            return ""
        return re.sub(r'\s+', ' ', self.document.title.get_text()).strip()

    def capture_state(self) -> SavedPageState:
        return SavedPageState(html=str(self.document), title=self.title)

    def snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(self.document, self.url)

    def present(self, article: Article) -> None:
        body = self.document.body
        if body is None:
            raise ValueError("Page has no body to present into")

        container, back_button = build_reading_view(self.document, article)
        body.append(container)
        body.append(back_button)
        self.set_page_filter(self.page_filter)
        logger.debug("Reading view presented for %r", article.title)

    def restore(self, state: SavedPageState) -> None:
        for element_id in READER_ELEMENT_IDS:
            element = self.document.find(id=element_id)
            if element is None:
                logger.debug("Reader element #%s already gone", element_id)
                continue
            element.decompose()

        self._set_title(state.title)

    def set_page_filter(self, filter_value: str) -> None:
        """
        Apply a CSS filter to the whole page.

        Args:
            filter_value: CSS filter functions
        """
        style = self.document.find(id=PAGE_FILTER_STYLE_ID)
        if style is None:
            style = self.document.new_tag('style', attrs={'id': PAGE_FILTER_STYLE_ID})
            root = self.document.html or self.document
            root.append(style)

        css = page_filter_css(filter_value)
        if style.string != css:
            style.string = css

    def has_reader_artifacts(self) -> bool:
        return any(self.document.find(id=element_id) is not None
                   for element_id in READER_ELEMENT_IDS)

    def to_html(self) -> str:
        """Serialize the live page."""
        return str(self.document)

    def _set_title(self, title: str) -> None:
        if self.document.title is not None:
            self.document.title.string = title
            return

        if not title:
            return

        title_tag = self.document.new_tag('title')
        title_tag.string = title
        head = self.document.head
        if head is None:
            head = self.document.new_tag('head')
            if self.document.html is not None:
                self.document.html.insert(0, head)
            else:
                self.document.insert(0, head)
        head.append(title_tag)
