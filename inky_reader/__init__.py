"""
Inky Reader - Reader mode and e-ink filtering for web pages.

Extracts the article from an arbitrary page and swaps the page for a
distraction-free reading view that can be toggled off again without
leaving a trace.
"""

__version__ = "1.0.0"

from .models import Article, ExtractionFailure, ToggleResult

__all__ = ["Article", "ExtractionFailure", "ToggleResult"]
