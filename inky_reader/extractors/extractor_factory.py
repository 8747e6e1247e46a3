"""
Extractor factory for inky-reader.

This module provides a factory for managing extraction engines, choosing
between the configured primary engine and an optional fallback.
"""

import logging
import time
from enum import Enum
from typing import Optional, List

from .heuristic_extractor import HeuristicExtractor
from .snapshot import DocumentSnapshot
from ..config import get_config
from ..exceptions import ComponentUnavailable
from ..models import Article, ExtractionResult

logger = logging.getLogger(__name__)


class ExtractorType(Enum):
    """Available extractor types."""
    HEURISTIC = "heuristic"


class ExtractorFactory:
    """
    Factory for managing extraction engines with fallback.

    The primary engine runs first; the fallback engine, when configured,
    only runs if the primary one fails or cannot be loaded.
    """

    def __init__(self, config=None):
        """Initialize the extractor factory."""
        self.config = config if config is not None else get_config()
        self.extractor_config = self.config.get_extractor_config()

        primary = self.extractor_config.get('engine') or ExtractorType.HEURISTIC.value
        fallback = self.extractor_config.get('fallback')

        self.extractors = self._setup_extractors(primary, fallback)

        # Cache extractor instances for reuse
        self._extractor_cache = {}

    def _setup_extractors(self, primary: str, fallback: Optional[str]) -> List[str]:
        """
        Set up the engine order based on configuration.

        Args:
            primary: Primary engine name
            fallback: Fallback engine name, or None

        Returns:
            List of engine names in order of preference
        """
        extractors = [primary.lower()]
        if fallback and fallback.lower() not in extractors:
            extractors.append(fallback.lower())
        return extractors

    def get_extractor(self, name: str):
        """
        Get an engine instance, using cache for efficiency.

        Args:
            name: Engine name

        Returns:
            Extractor instance

        Raises:
            ComponentUnavailable: If the engine is unknown
        """
        extractor_type = self._get_extractor_type(name)
        if extractor_type is None:
            raise ComponentUnavailable(f"Unknown extractor: {name}")

        if extractor_type not in self._extractor_cache:
            if extractor_type == ExtractorType.HEURISTIC:
                self._extractor_cache[extractor_type] = HeuristicExtractor()

        return self._extractor_cache[extractor_type]

    def extract(self, snapshot: DocumentSnapshot,
                preferred_extractor: Optional[str] = None) -> ExtractionResult:
        """
        Extract an article using the best available engine.

        Args:
            snapshot: Snapshot of the page to read
            preferred_extractor: Optional engine name to try first

        Returns:
            ExtractionResult with the extracted article or error information

        Raises:
            ComponentUnavailable: If none of the engines could be loaded
        """
        extractor_order = self.extractors.copy()
        if preferred_extractor:
            preferred = preferred_extractor.lower()
            if preferred in extractor_order:
                extractor_order.remove(preferred)
            extractor_order.insert(0, preferred)

        last_result = None
        unavailable = []

        for name in extractor_order:
            try:
                extractor = self.get_extractor(name)
            except ComponentUnavailable as e:
                logger.warning("Skipping extractor %s: %s", name, e)
                unavailable.append(str(e))
                continue

            start_time = time.time()
            outcome = extractor.extract(snapshot)
            elapsed = time.time() - start_time

            if isinstance(outcome, Article):
                logger.debug("Extractor %s succeeded in %.3fs", name, elapsed)
                return ExtractionResult(
                    article=outcome,
                    success=True,
                    extractor_used=name,
                    extraction_time_seconds=elapsed
                )

            logger.info("Extractor %s failed: %s", name, outcome.message or outcome.reason)
            last_result = ExtractionResult(
                success=False,
                error_message=outcome.message or outcome.reason,
                extractor_used=name,
                extraction_time_seconds=elapsed
            )

        if last_result is None:
            raise ComponentUnavailable("; ".join(unavailable) or "No extractors configured")

        return last_result

    def _get_extractor_type(self, extractor_name: str) -> Optional[ExtractorType]:
        """
        Convert extractor name to ExtractorType.

        Args:
            extractor_name: Name of the extractor

        Returns:
            ExtractorType or None if not found
        """
        try:
            return ExtractorType(extractor_name.lower())
        except ValueError:
            return None

    def get_available_extractors(self) -> List[str]:
        """
        Get names of the engines that can actually be loaded.

        Returns:
            List of extractor names
        """
        available = []
        for extractor_type in ExtractorType:
            try:
                self.get_extractor(extractor_type.value)
            except ComponentUnavailable:
                continue
            available.append(extractor_type.value)
        return available
