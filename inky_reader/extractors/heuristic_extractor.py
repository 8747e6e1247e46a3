"""
Heuristic article extractor for inky-reader.

This is the default extraction engine. It runs a single deterministic pass
over a snapshot: strip noise, locate the main content element, read the
metadata, prune the content subtree and serialize it.
"""

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

from .content_cleaner import ContentCleaner
from .metadata_extractor import MetadataExtractor
from .snapshot import DocumentSnapshot
from ..models import Article, ExtractionFailure, NO_CONTENT_FOUND, INTERNAL_ERROR

logger = logging.getLogger(__name__)

# Tried in order; the first selector with any match wins
CONTENT_SELECTORS = (
    'article',
    '[role="main"]',
    '.article',
    '.content',
    '.post',
    '.main',
)

# A density candidate needs strictly more paragraphs than this
MIN_PARAGRAPHS = 2


class HeuristicExtractor:
    """
    Simplified readability-style extractor.

    ``extract`` is a pure function of the snapshot: it never raises and
    returns the same result for the same snapshot.
    """

    name = "heuristic"

    def __init__(self):
        self.cleaner = ContentCleaner()
        self.metadata = MetadataExtractor()

    def extract(self, snapshot: DocumentSnapshot) -> Union[Article, ExtractionFailure]:
        """
        Extract an article from a snapshot.

        Args:
            snapshot: Snapshot of the page to read

        Returns:
            Article on success, ExtractionFailure otherwise
        """
        try:
            return self._extract(snapshot)
        except Exception as e:
            logger.warning("Heuristic extraction failed: %s", e, exc_info=True)
            return ExtractionFailure(
                reason=INTERNAL_ERROR,
                message=f"Extraction failed: {e}",
                extractor_used=self.name
            )

    def _extract(self, snapshot: DocumentSnapshot) -> Union[Article, ExtractionFailure]:
        document = snapshot.working_copy()
        self.cleaner.strip_noise(document)

        main_content = self.locate_main_content(document)
        if main_content is None:
            return ExtractionFailure(
                reason=NO_CONTENT_FOUND,
                message="Document has no body",
                extractor_used=self.name
            )

        metadata = self.metadata.extract(document, snapshot.domain)

        cleaned = self.cleaner.clean_subtree(main_content)
        if not self.cleaner.has_content(cleaned):
            return ExtractionFailure(
                reason=NO_CONTENT_FOUND,
                message="No readable content found",
                extractor_used=self.name
            )

        return Article(
            title=metadata.title,
            content=self._serialize(cleaned),
            byline=metadata.byline,
            excerpt=metadata.excerpt,
            site_name=metadata.site_name,
            published_time=metadata.published_time
        )

    def locate_main_content(self, document: BeautifulSoup) -> Optional[Tag]:
        """
        Find the element holding the article body.

        Fallback order: the prioritized selectors, then the element with the
        most descendant paragraphs, then <body>.

        Args:
            document: Noise-stripped working copy

        Returns:
            The selected element, or None if the document has no body
        """
        for selector in CONTENT_SELECTORS:
            element = document.select_one(selector)
            if element is not None:
                logger.debug("Main content matched selector %r", selector)
                return element

        body = document.body
        if body is None:
            return None

        densest = self.find_densest_element(body)
        if densest is not None:
            return densest

        logger.debug("Falling back to <body> for main content")
        return body

    @staticmethod
    def find_densest_element(body: Tag) -> Optional[Tag]:
        """
        Pick the descendant with the most <p> descendants.

        Only a count above MIN_PARAGRAPHS qualifies and only a strictly
        higher count replaces the current best, so ties keep the element
        met first in document order.

        Args:
            body: Document body

        Returns:
            The densest element, or None if nothing passes the threshold
        """
        best = None
        best_count = 0

        for element in body.find_all(True):
            count = len(element.find_all('p'))
            if count > best_count and count > MIN_PARAGRAPHS:
                best = element
                best_count = count

        if best is not None:
            logger.debug("Main content chosen by density: <%s> with %d paragraphs",
                         best.name, best_count)
        return best

    @staticmethod
    def _serialize(element: Tag) -> str:
        # A body cannot be nested inside the reading view
        if element.name == 'body':
            element.name = 'div'
        return str(element)
