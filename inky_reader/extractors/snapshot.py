"""
Document snapshots for extraction.

A snapshot is an isolated copy of a page tree. Extractors never work on the
snapshot directly; every extraction gets its own working copy, so the live
page and the snapshot stay untouched.
"""

import copy
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

HTML_PARSER = "lxml"


class DocumentSnapshot:
    """Immutable copy of a document tree taken at a point in time."""

    def __init__(self, document: BeautifulSoup, url: Optional[str] = None):
        """
        Capture a snapshot of a document.

        Args:
            document: Parsed document to copy. The snapshot never aliases it.
            url: Address the document was loaded from, if known
        """
        self._document = copy.copy(document)
        self.url = url

    @classmethod
    def from_html(cls, html: str, url: Optional[str] = None) -> 'DocumentSnapshot':
        """
        Parse markup into a snapshot.

        Args:
            html: Raw page markup
            url: Address the markup was loaded from, if known

        Returns:
            DocumentSnapshot instance
        """
        return cls(BeautifulSoup(html, HTML_PARSER), url)

    @property
    def domain(self) -> str:
        """Host name of the snapshot URL, or an empty string."""
        if not self.url:
            return ""
        return urlparse(self.url).hostname or ""

    def working_copy(self) -> BeautifulSoup:
        """Return a fresh deep copy that the caller is free to mutate."""
        return copy.copy(self._document)

    def to_html(self) -> str:
        """Serialize the snapshot back to markup."""
        return str(self._document)
