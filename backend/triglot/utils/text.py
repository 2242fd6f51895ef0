"""Text utilities for log previews and tagged sentence blocks."""

import re

# Break points considered when shortening a preview
_BREAK_CHARS = frozenset(" \n\t,.!?;:-。，、；：")

_TAG_PATTERN = re.compile(r"<s(\d+)>(.*?)</s\1>", re.DOTALL)


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Shorten text for a log preview without splitting a sentence mid-word.

    Looks back up to 20 characters for a space or punctuation mark (Chinese
    punctuation included) and cuts there when one is found.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    for back in range(1, min(20, max_chars - 1) + 1):
        if truncated[-back] in _BREAK_CHARS:
            truncated = truncated[: max_chars - back + 1].rstrip()
            break

    return truncated + suffix


def count_tagged_sentences(block: str) -> int:
    """Number of ``<sN>...</sN>`` pairs in a block."""
    return sum(1 for _ in _TAG_PATTERN.finditer(block or ""))
