"""
Exceptions raised across inky-reader boundaries.

Extraction failures are not exceptions: extractors return an
``ExtractionFailure`` marker instead.
"""


class InkyReaderError(Exception):
    """Base class for inky-reader errors."""


class ComponentUnavailable(InkyReaderError):
    """A required extraction engine could not be loaded."""


class SourceError(InkyReaderError):
    """A page source could not be read or downloaded."""
