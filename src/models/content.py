"""
Composed review content and sentiment buckets.
"""

from dataclasses import dataclass, field
from typing import List

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"

SENTIMENTS = (POSITIVE, NEUTRAL, NEGATIVE)


def sentiment_for_rating(rating: int) -> str:
    """
    Map a star rating to its sentiment bucket.

    4-5 -> positive, 3 -> neutral, 1-2 -> negative.
    """
    if not (1 <= rating <= 5):
        raise ValueError(f"Invalid rating: {rating}. Must be 1-5")
    if rating >= 4:
        return POSITIVE
    if rating == 3:
        return NEUTRAL
    return NEGATIVE


@dataclass
class ComposedContent:
    """Text parts of a single review, before metadata is attached."""
    title: str
    content: str
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)
    sentiment: str = POSITIVE

    def __post_init__(self):
        if self.sentiment not in SENTIMENTS:
            raise ValueError(f"Invalid sentiment: {self.sentiment}. Must be one of {SENTIMENTS}")
