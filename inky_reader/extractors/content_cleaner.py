"""
Structural content cleaning for inky-reader.

This module removes page noise (scripts, styles, hidden elements and
navigation chrome) from a document tree and prunes empty wrapper elements
from an extracted content subtree. Every filter here is structural: a match
is removed unconditionally, nothing is scored.
"""

import copy
import logging
from typing import Union

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements that are never part of the article body
UNLIKELY_CANDIDATES_SELECTOR = ", ".join([
    'aside', 'footer', 'header', 'nav', 'script', 'style',
    '[role="banner"]', '[role="complementary"]', '[role="navigation"]',
    '[role="search"]', '[aria-hidden="true"]',
])

SCRIPT_SELECTOR = 'script, noscript'

Node = Union[BeautifulSoup, Tag]


class ContentCleaner:
    """
    Structural cleaner for snapshot documents and content subtrees.

    The cleaner mutates the trees it is given, so callers only hand it
    throwaway copies.
    """

    def strip_noise(self, document: Node) -> None:
        """
        Remove everything that can never be article content.

        Hidden elements are detected from inline styles, so they are removed
        before the styles themselves are stripped.

        Args:
            document: Working copy of a page (mutated in place)
        """
        self.remove_hidden_elements(document)
        self.clean_styles(document)
        self.remove_scripts(document)
        self.remove_unlikely_candidates(document)

    def clean_styles(self, document: Node) -> None:
        """Strip inline style attributes and drop <style> tags."""
        for element in document.find_all(style=True):
            del element['style']

        for style_tag in document.find_all('style'):
            style_tag.extract()

    def remove_scripts(self, document: Node) -> None:
        """Drop <script> and <noscript> elements."""
        self._remove_matching(document, SCRIPT_SELECTOR)

    def remove_unlikely_candidates(self, document: Node) -> None:
        """Drop navigation, header, footer, aside and ARIA-marked chrome."""
        removed = self._remove_matching(document, UNLIKELY_CANDIDATES_SELECTOR)
        if removed:
            logger.debug("Removed %d unlikely candidate elements", removed)

    def remove_hidden_elements(self, document: Node) -> None:
        """Drop elements that would not be rendered."""
        for element in document.find_all(True):
            if self.is_hidden(element):
                element.extract()

    @staticmethod
    def is_hidden(element: Tag) -> bool:
        """
        Check whether an element resolves to not displayed, not visible or
        fully transparent.

        Args:
            element: Element to inspect

        Returns:
            True if the element is hidden
        """
        if element.has_attr('hidden'):
            return True

        style = element.get('style')
        if not style:
            return False

        for declaration in style.split(';'):
            if ':' not in declaration:
                continue
            prop, value = declaration.split(':', 1)
            prop = prop.strip().lower()
            value = value.replace('!important', '').strip().lower()

            if prop == 'display' and value == 'none':
                return True
            if prop == 'visibility' and value == 'hidden':
                return True
            if prop == 'opacity':
                try:
                    if float(value.rstrip('%')) == 0:
                        return True
                except ValueError:
                    continue

        return False

    def clean_subtree(self, element: Tag) -> Tag:
        """
        Produce a cleaned deep copy of the selected content element.

        Empty wrappers are pruned bottom-up, then the unlikely-candidate
        filter runs again over whatever survived.

        Args:
            element: Selected main content element (left untouched)

        Returns:
            Cleaned detached copy of the element
        """
        cleaned = copy.copy(element)
        self.prune_empty_elements(cleaned)
        self.remove_unlikely_candidates(cleaned)
        return cleaned

    def prune_empty_elements(self, root: Tag) -> None:
        """
        Remove descendants with no text and no image, depth-first post-order.

        Walking the pre-order list backwards visits every element after all
        of its descendants, so a wrapper whose only children were pruned is
        itself empty by the time it is checked.

        Args:
            root: Subtree root (kept even when empty)
        """
        for element in reversed(root.find_all(True)):
            if not self.has_content(element):
                element.extract()

    @staticmethod
    def has_content(element: Node) -> bool:
        """
        Check whether an element holds visible text or an image.

        Args:
            element: Element to inspect

        Returns:
            True if the element has non-whitespace text or contains an <img>
        """
        if element.get_text().strip():
            return True
        if getattr(element, 'name', None) == 'img':
            return True
        return element.find('img') is not None

    @staticmethod
    def _remove_matching(document: Node, selector: str) -> int:
        matches = document.select(selector)
        for element in matches:
            element.extract()
        return len(matches)
