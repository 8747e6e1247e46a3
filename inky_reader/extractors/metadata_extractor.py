"""
Article metadata extraction for inky-reader.

Each field has its own fallback chain and is read independently of which
element was chosen as the article body.
"""

import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

BYLINE_SELECTOR = '[rel="author"], .author, .byline'
PUBLISHED_TIME_SELECTOR = 'time[datetime], [itemprop="datePublished"]'


@dataclass(frozen=True)
class ArticleMetadata:
    """Metadata fields gathered from a snapshot document."""

    title: str = ""
    byline: str = ""
    excerpt: str = ""
    site_name: str = ""
    published_time: str = ""


def _clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def _meta_content(document: BeautifulSoup, selector: str) -> str:
    element = document.select_one(selector)
    if element is None:
        return ""
    return _clean_text(element.get('content'))


class MetadataExtractor:
    """Reads title, byline, excerpt, site name and publish time from a page."""

    def extract(self, document: BeautifulSoup, domain: str = "") -> ArticleMetadata:
        """
        Extract all metadata fields.

        Args:
            document: Snapshot working copy (not mutated)
            domain: Host the page came from, used when no site name is declared

        Returns:
            ArticleMetadata with empty strings for anything not found
        """
        return ArticleMetadata(
            title=self.extract_title(document),
            byline=self.extract_byline(document),
            excerpt=self.extract_excerpt(document),
            site_name=self.extract_site_name(document, domain),
            published_time=self.extract_published_time(document)
        )

    def extract_title(self, document: BeautifulSoup) -> str:
        """Document title, overridden by an Open Graph title."""
        og_title = _meta_content(document, 'meta[property="og:title"]')
        if og_title:
            return og_title

        if document.title is not None:
            return _clean_text(document.title.get_text())
        return ""

    def extract_byline(self, document: BeautifulSoup) -> str:
        byline = document.select_one(BYLINE_SELECTOR)
        if byline is None:
            return ""
        return _clean_text(byline.get_text(" "))

    def extract_excerpt(self, document: BeautifulSoup) -> str:
        """Meta description, else Open Graph description."""
        return (_meta_content(document, 'meta[name="description"]')
                or _meta_content(document, 'meta[property="og:description"]'))

    def extract_site_name(self, document: BeautifulSoup, domain: str = "") -> str:
        return _meta_content(document, 'meta[property="og:site_name"]') or domain or ""

    def extract_published_time(self, document: BeautifulSoup) -> str:
        """
        Publish time as found on the page.

        The value is returned raw; it is not guaranteed to parse as a date.

        Args:
            document: Snapshot working copy

        Returns:
            The datetime/content attribute, else the element text, else ""
        """
        element: Optional[Tag] = document.select_one(PUBLISHED_TIME_SELECTOR)
        if element is None:
            return ""

        for attribute in ('datetime', 'content'):
            value = _clean_text(element.get(attribute))
            if value:
                return value

        return _clean_text(element.get_text(" "))
