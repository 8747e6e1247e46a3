"""
Output processors for inky-reader.

This package contains converters that render an extracted Article in
formats other than HTML.
"""

from .markdown_converter import MarkdownConverter

__all__ = ["MarkdownConverter"]
