"""Text processing utilities.

Common text manipulation functions used across modules.
"""

import math
import re
from dataclasses import dataclass

DEFAULT_WORDS_PER_MINUTE = 200

# Anchor ids: drop punctuation, collapse separators into single hyphens
_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


@dataclass
class ReadingTime:
    """Estimated reading time for a body of text."""

    text: str
    minutes: float
    time: int  # milliseconds
    words: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "minutes": self.minutes,
            "time": self.time,
            "words": self.words,
        }


def calculate_reading_time(
    text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> ReadingTime:
    """Estimate how long a text takes to read.

    Words are whitespace-separated tokens. The display text rounds the
    minutes to two decimals first and then up to the next whole minute,
    so 250 words at 200 wpm reads as "2 min read".

    Args:
        text: Markdown or plain text body
        words_per_minute: Reading speed

    Returns:
        ReadingTime with words, fractional minutes, milliseconds and label
    """
    words = len(text.split())
    minutes = words / words_per_minute if words_per_minute > 0 else 0.0
    displayed = math.ceil(round(minutes, 2))
    return ReadingTime(
        text=f"{displayed} min read",
        minutes=minutes,
        time=round(minutes * 60 * 1000),
        words=words,
    )


def slugify(text: str, separator: str = "-") -> str:
    """Build an anchor id from heading text.

    "Core Concepts: Variables" -> "core-concepts-variables"
    """
    slug = _NON_WORD.sub("", text.lower())
    slug = _SEPARATORS.sub(separator, slug)
    return slug.strip(separator)


def title_from_slug(slug: str) -> str:
    """Readable fallback title for content without one."""
    return " ".join(part.capitalize() for part in re.split(r"[-_]+", slug) if part)


def round_half_up(value: float) -> int:
    """Round to the nearest int, .5 always going up."""
    return math.floor(value + 0.5)
