"""
Tagged block extraction.

Finds <tag>...</tag> regions in free text. Tags are matched case-insensitively,
may carry whitespace before the closing '>', and the inner text may span lines.
Unterminated tags simply do not match.
"""

import re
from functools import lru_cache
from typing import List, Pattern

from domain.entities.npc_models import TagBlock


@lru_cache(maxsize=64)
def tag_pattern(tag: str) -> Pattern[str]:
    """Compiled pattern for one tag name."""
    escaped = re.escape(tag)
    return re.compile(rf"<{escaped}\s*>(.*?)</{escaped}>", re.IGNORECASE | re.DOTALL)


def extract_blocks(text: str, tag: str) -> List[TagBlock]:
    """
    Find all non-overlapping blocks for a tag, in order of appearance.

    Args:
        text: Message text to scan
        tag: Tag name without angle brackets

    Returns:
        List of TagBlock (possibly empty)
    """
    if not text:
        return []

    return [
        TagBlock(tag=tag, span=match.span(), raw=match.group(0), content=match.group(1))
        for match in tag_pattern(tag).finditer(text)
    ]


def replace_blocks(text: str, replacements: List[tuple]) -> str:
    """
    Replace block spans with new text.

    Args:
        text: Original text the spans refer to
        replacements: (TagBlock, replacement) pairs; spans must not overlap

    Returns:
        Text with every listed span replaced
    """
    pieces = []
    cursor = 0
    for block, replacement in sorted(replacements, key=lambda pair: pair[0].span[0]):
        start, end = block.span
        pieces.append(text[cursor:start])
        pieces.append(replacement)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)
