"""
Content extraction modules for inky-reader.

This package contains the engines that turn a page snapshot into an Article.
"""

from .snapshot import DocumentSnapshot
from .heuristic_extractor import HeuristicExtractor
from .extractor_factory import ExtractorFactory

__all__ = ["DocumentSnapshot", "HeuristicExtractor", "ExtractorFactory"]
