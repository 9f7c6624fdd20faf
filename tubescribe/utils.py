"""
tubescribe.utils - Shared utility functions.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

_UNSAFE_FILENAME_CHARS = re.compile(r'[ /\\:*?"<>|]')


def sanitize_filename(name: str) -> str:
    """Replace spaces and path/shell-hostile characters with underscores.

    Args:
        name: Candidate filename (extension included, if any)

    Returns:
        Name safe to use as a single path component
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


def is_valid_url(url: str) -> bool:
    """Check that ``url`` is an absolute URI with a scheme and host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)
