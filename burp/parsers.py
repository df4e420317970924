#!/usr/bin/env python3
"""
Helpers for reading the HTML pages the AUR answers with.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from .constants import LOGGED_IN_MARKER

# Error blocks rendered by the AUR web interface.
ERROR_SELECTOR = "span.error, ul.errorlist"

_WHITESPACE = re.compile(r"\s+")
_LOGOUT_HREF = re.compile(re.escape(LOGGED_IN_MARKER))


def _soup(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


def clean_text(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def extract_error(body: str) -> Optional[str]:
    """
    Find the first error message on an AUR page.

    Args:
        body: HTML page

    Returns:
        The error text with markup removed and entities decoded, or None if
        the page has no non-empty error block
    """
    if not body:
        return None
    for node in _soup(body).select(ERROR_SELECTOR):
        text = clean_text(node.get_text(" ", strip=True))
        if text:
            return text
    return None


def is_logged_in(body: str) -> bool:
    """A page rendered for a logged in user links to the logout handler."""
    if not body:
        return False
    return _soup(body).find("a", href=_LOGOUT_HREF) is not None
