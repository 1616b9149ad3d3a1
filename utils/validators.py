"""
Input normalization helpers for host field values and endpoint URLs.
"""

from typing import List
from urllib.parse import urlparse


SYMBOL_SEPARATOR = ","


def split_symbol_tokens(text: str) -> List[str]:
    """
    Split a comma-separated field value into symbol tokens.

    Whitespace around tokens is trimmed, empty tokens are dropped and
    repeated tokens keep their first position.

    Args:
        text: Raw field text, e.g. "005930,  000660 ,"

    Returns:
        Ordered list of unique tokens
    """
    if not text:
        return []

    tokens: List[str] = []
    for raw in text.split(SYMBOL_SEPARATOR):
        token = raw.strip()
        if token and token not in tokens:
            tokens.append(token)
    return tokens


def is_absolute_url(url: str) -> bool:
    """
    Check if the endpoint is a full http(s) URL rather than a path.

    Args:
        url: Endpoint string

    Returns:
        True if scheme and host are present
    """
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False
