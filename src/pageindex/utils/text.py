"""Text helpers: tokenization and term counting."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List

_SEPARATOR = re.compile(r"[^\w']+")


def tokenize(text: str) -> List[str]:
    """Split text into lowercase word tokens.

    Words are runs of letters, digits, underscores and apostrophes; everything
    else separates them. Empty pieces are dropped and duplicates are kept.
    """
    if not text:
        return []
    return [piece.lower() for piece in _SEPARATOR.split(text) if piece]


def word_frequencies(tokens: Iterable[str]) -> Counter[str]:
    """Count case-folded token occurrences."""
    return Counter(token.lower() for token in tokens)
