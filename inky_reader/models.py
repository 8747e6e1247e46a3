"""
Data models for inky-reader.

This module contains the core data structures shared by the extractors,
the reader session and the CLI.
"""

import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class Article:
    """
    Represents an article extracted from a page snapshot.

    An Article is only ever built by a successful extraction, so ``content``
    always holds non-empty cleaned markup.
    """

    title: str
    content: str
    byline: str = ""
    excerpt: str = ""
    site_name: str = ""
    published_time: str = ""

    @property
    def text_content(self) -> str:
        """Plain text of the article body with whitespace collapsed."""
        text = BeautifulSoup(self.content, "html.parser").get_text(" ")
        return re.sub(r'\s+', ' ', text).strip()

    @property
    def word_count(self) -> int:
        """Number of whitespace separated words in the article body."""
        return len(self.text_content.split())

    @property
    def reading_time_minutes(self) -> int:
        """
        Estimate reading time in minutes (assuming 200 words per minute).

        Returns:
            Estimated reading time in minutes
        """
        if not self.word_count:
            return 0
        return max(1, self.word_count // 200)

    @property
    def meta_line(self) -> str:
        """
        Build the byline/date/site-name line shown under the title.

        Returns:
            The non-empty parts joined by a middle dot, or an empty string
        """
        parts = [self.byline, self.published_time, self.site_name]
        return " · ".join(part for part in parts if part)

    def to_dict(self) -> dict:
        """
        Convert article to dictionary format.

        Returns:
            Dictionary representation of the article
        """
        return {
            'title': self.title,
            'byline': self.byline,
            'content': self.content,
            'excerpt': self.excerpt,
            'siteName': self.site_name,
            'publishedTime': self.published_time,
            'word_count': self.word_count,
            'reading_time_minutes': self.reading_time_minutes
        }


NO_CONTENT_FOUND = "no_content_found"
INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ExtractionFailure:
    """
    Failure marker returned by an extractor.

    Extractors return this instead of raising. Both reasons surface to the
    user the same way.
    """

    reason: str
    message: str = ""
    extractor_used: Optional[str] = None


@dataclass
class ExtractionResult:
    """
    Result of content extraction process.

    Contains the extracted article and metadata about the extraction process.
    """

    article: Optional[Article] = None
    success: bool = False
    error_message: Optional[str] = None
    extractor_used: Optional[str] = None
    extraction_time_seconds: Optional[float] = None

    @property
    def failed(self) -> bool:
        """Check if extraction failed."""
        return not self.success or self.article is None


@dataclass(frozen=True)
class SavedPageState:
    """Serialized original page, captured once per activation cycle."""

    html: str
    title: str


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a reader toggle as reported to callers."""

    success: bool
    active: bool

    def to_dict(self) -> dict:
        return {'success': self.success, 'active': self.active}
