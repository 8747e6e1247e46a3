"""
Markdown conversion for inky-reader.

This module renders an extracted Article as Markdown, for reading or
saving the article outside the browser.
"""

import re
from typing import List

from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..models import Article


class MarkdownConverter(BaseMarkdownConverter):
    """
    Markdown converter for article content.

    Extends markdownify with a title/metadata header and cleanup of the
    blank-line noise left behind by pruned wrapper elements.
    """

    def __init__(self):
        """Initialize the Markdown converter."""
        super().__init__(
            heading_style='atx',  # Use # headings
            bullets='-',          # Use - for bullets
            strip=['script', 'style', 'form', 'input', 'button']
        )

        # Patterns for cleaning up converted markdown
        self.cleanup_patterns = [
            # Remove excessive whitespace
            (r'\n\s*\n\s*\n+', '\n\n'),
            # Drop empty links
            (r'\[\s*\]\(\s*\)', ''),
            # Trailing spaces
            (r'[ \t]+\n', '\n'),
        ]

    def render_article(self, article: Article) -> str:
        """
        Convert an article to a standalone Markdown document.

        Args:
            article: Extracted article

        Returns:
            Markdown text with a title, metadata line and body
        """
        parts: List[str] = []
        if article.title:
            parts.append(f"# {article.title}")
        if article.meta_line:
            parts.append(f"*{article.meta_line}*")
        if article.excerpt:
            parts.append(f"> {article.excerpt}")

        parts.append(self.render_content(article.content))
        return "\n\n".join(part for part in parts if part) + "\n"

    def render_content(self, content: str) -> str:
        """
        Convert article HTML content to clean Markdown.

        Args:
            content: HTML content to convert

        Returns:
            Clean Markdown content
        """
        markdown = self.convert(content)
        for pattern, replacement in self.cleanup_patterns:
            markdown = re.sub(pattern, replacement, markdown)
        return markdown.strip()
