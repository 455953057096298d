"""ICU plural sub-expression stripping.

Translators may add or drop plural categories, so the text inside
``{count, plural, one {...} other {...}}`` is not comparable between a
source and its translation. Rules compare what remains after the plural
blocks are removed.
"""

import re
from typing import Optional

PLURAL_START = re.compile(r'\{\s*[\w.]+\s*,\s*(plural|selectordinal)\s*,')


def _block_end(text: str, start: int) -> Optional[int]:
    """Return the offset just after the brace matching the one at ``start``."""
    depth = 0
    for pos in range(start, len(text)):
        char = text[pos]
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return pos + 1
    return None


def strip_plurals(text: Optional[str]) -> Optional[str]:
    """
    Remove every ICU plural or selectordinal block from a string.

    Args:
        text: Message text, may be None

    Returns:
        The text without plural blocks. An unbalanced block is left in place.
    """
    if not text:
        return text

    parts = []
    cursor = 0
    while True:
        match = PLURAL_START.search(text, cursor)
        if not match:
            break
        end = _block_end(text, match.start())
        if end is None:
            break
        parts.append(text[cursor:match.start()])
        cursor = end

    parts.append(text[cursor:])
    return ''.join(parts)
