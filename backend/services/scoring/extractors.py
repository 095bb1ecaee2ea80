"""Leaf-level text heuristics shared by every validator.

All functions are pure and total: empty or missing text yields 0/False.
"""

import math
import re
from typing import Iterable, Sequence

_WORD_RE = re.compile(r"\S+")


def check_keywords(text: str | None, keywords: Sequence[str]) -> float:
    """Fraction of ``keywords`` found in ``text`` (case-insensitive substring).

    Returns a value in [0, 1]; 0 for empty text or an empty keyword list.
    """
    if not text or not keywords:
        return 0.0
    lower = text.lower()
    found = sum(1 for kw in keywords if kw.lower() in lower)
    return min(found / len(keywords), 1.0)


def contains_any(text: str | None, terms: Iterable[str]) -> bool:
    if not text:
        return False
    lower = text.lower()
    return any(term.lower() in lower for term in terms)


def any_item_contains(items: Iterable[str], terms: Iterable[str]) -> bool:
    terms = list(terms)
    return any(contains_any(item, terms) for item in items)


def has_min_length(text: str | None, min_length: int) -> bool:
    return bool(text) and len(text) >= min_length


def longer_than(text: str | None, length: int) -> bool:
    return bool(text) and len(text) > length


def count_items(text: str | None, sep: str = ",") -> int:
    """Number of ``sep``-separated segments; 0 for empty text."""
    if not text:
        return 0
    return len(text.split(sep))


def word_count(text: str | None) -> int:
    if not text:
        return 0
    return len(_WORD_RE.findall(text))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching the scores users see."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return min(100, max(0, round_half_up(value)))


def scale_to_100(value: float, max_value: float = 5.0) -> int:
    """Convert a sub-score on a 0..max scale into a clamped 0-100 score."""
    if max_value <= 0:
        return 0
    return clamp_score(value / max_value * 100)
