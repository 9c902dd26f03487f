"""Utility helpers for string normalization."""

from __future__ import annotations

import math
import re
import unicodedata

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")

# Latin letters that have no NFKD decomposition into ASCII.
TRANSLITERATIONS = str.maketrans(
    {
        "ß": "ss",
        "ẞ": "SS",
        "Æ": "AE",
        "æ": "ae",
        "Œ": "OE",
        "œ": "oe",
        "Ø": "O",
        "ø": "o",
        "Ł": "L",
        "ł": "l",
        "Đ": "D",
        "đ": "d",
        "Ð": "D",
        "ð": "d",
        "Þ": "TH",
        "þ": "th",
        "Ħ": "H",
        "ħ": "h",
        "ı": "i",
    }
)


def slugify(value: str, fallback: str = "post") -> str:
    """Generate a URL-safe slug using ASCII characters only."""
    normalized = unicodedata.normalize("NFKD", value.translate(TRANSLITERATIONS))
    normalized = normalized.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def count_words(text: str) -> int:
    return len(text.split())


def reading_time_minutes(text: str, words_per_minute: int = 200) -> int:
    """Estimate reading time, never less than one minute."""
    return max(1, math.ceil(count_words(text) / words_per_minute))
