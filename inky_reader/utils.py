#!/usr/bin/env python3
"""
Utility functions for Inky Reader.

This module provides common helpers used across the application: URL
checks, page loading from files or the web, and filename handling.
"""

import logging
import re
import unicodedata
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

import requests

from .exceptions import SourceError

logger = logging.getLogger(__name__)

HTTP_URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)


def is_http_url(url: Optional[str]) -> bool:
    """
    Check whether a string is an http(s) URL.

    Args:
        url: String to check

    Returns:
        True for http:// and https:// addresses with a host
    """
    if not url or not HTTP_URL_PATTERN.match(url):
        return False
    return bool(urlparse(url).netloc)


def sanitize_filename(filename: str, max_length: int = 255) -> str:
    """
    Sanitize a string to be safe for use as a filename.

    Args:
        filename: The original filename string
        max_length: Maximum length for the filename

    Returns:
        A sanitized filename safe for filesystem use
    """
    # Normalize unicode characters
    filename = unicodedata.normalize('NFKD', filename)

    # Keep alphanumeric, spaces, hyphens, underscores, and dots
    safe_chars = re.sub(r'[^\w\s\-_.]', '', filename)
    safe_chars = re.sub(r'\s+', ' ', safe_chars).strip()
    safe_chars = safe_chars.replace(' ', '_')

    # Remove leading dots to avoid hidden files
    safe_chars = safe_chars.lstrip('.')

    if not safe_chars:
        safe_chars = 'unnamed_file'

    return safe_chars[:max_length]


def truncate_text(text: str, max_length: int = 100,
                  suffix: str = '...') -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncating

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    return text[:truncate_length].rstrip() + suffix


def create_session(user_agent: str) -> requests.Session:
    """
    Create an HTTP session with browser-like headers.

    Args:
        user_agent: User agent string to send

    Returns:
        Configured requests session
    """
    session = requests.Session()
    session.headers.update({
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
        'Accept-Encoding': 'gzip, deflate',
        'Connection': 'keep-alive',
    })
    return session


def download_page(url: str, session: requests.Session, timeout: int = 30) -> str:
    """
    Download HTML content from URL.

    Args:
        url: URL to download
        session: HTTP session to use
        timeout: Request timeout in seconds

    Returns:
        HTML content as string

    Raises:
        SourceError: If the download fails or the response is not HTML
    """
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SourceError(f"Download failed for {url}: {e}") from e

    content_type = response.headers.get('content-type', '').lower()
    if content_type and 'html' not in content_type:
        raise SourceError(f"Not an HTML page ({content_type}): {url}")

    return response.text


def load_source(source: str, user_agent: str = 'inky-reader/1.0.0',
                timeout: int = 30) -> Tuple[str, Optional[str]]:
    """
    Load page markup from a URL or a local file.

    Args:
        source: http(s) URL or path to an HTML file
        user_agent: User agent for downloads
        timeout: Download timeout in seconds

    Returns:
        Tuple of (html, url); url is None for local files

    Raises:
        SourceError: If the source cannot be read
    """
    if is_http_url(source):
        logger.debug("Downloading %s", source)
        return download_page(source, create_session(user_agent), timeout), source

    path = Path(source).expanduser()
    try:
        return path.read_text(encoding='utf-8', errors='replace'), None
    except OSError as e:
        raise SourceError(f"Cannot read {source}: {e}") from e
