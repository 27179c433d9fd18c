"""
Rating distribution model.

Weighted mapping from star rating (1-5) to a non-negative weight.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Mapping, Union

from src.errors import ConfigurationError

VALID_RATINGS = (1, 2, 3, 4, 5)


@dataclass
class RatingDistribution:
    """
    Weights per rating. Weights do not need to sum to 100,
    the sampler normalizes by total weight.
    """
    weights: Dict[int, float] = field(default_factory=dict)

    def __post_init__(self):
        coerced = {}
        for key, weight in self.weights.items():
            try:
                rating = int(key)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid rating key: {key!r}")

            if rating not in VALID_RATINGS:
                raise ConfigurationError(f"Invalid rating key: {key!r}. Must be 1-5")

            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise ConfigurationError(f"Weight for rating {rating} must be a number, got {weight!r}")
            if weight < 0:
                raise ConfigurationError(f"Weight for rating {rating} must be non-negative, got {weight}")

            coerced[rating] = coerced.get(rating, 0) + weight

        # Ascending key order is the sampling order
        self.weights = dict(sorted(coerced.items()))

        if self.total_weight <= 0:
            raise ConfigurationError("Rating distribution must have at least one positive weight")

    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())

    def probability(self, rating: int) -> float:
        """Normalized probability of drawing the given rating."""
        return self.weights.get(rating, 0) / self.total_weight

    def restricted_to(self, min_rating: int, max_rating: int) -> "RatingDistribution":
        """
        Return a copy with every rating outside [min_rating, max_rating] zeroed.

        Raises:
            ConfigurationError: If no positive weight remains in range
        """
        return RatingDistribution({
            rating: (weight if min_rating <= rating <= max_rating else 0)
            for rating, weight in self.weights.items()
        })

    @classmethod
    def from_mapping(cls, data: Union["RatingDistribution", Mapping]) -> "RatingDistribution":
        """Accept an existing distribution or a raw mapping (string keys allowed)."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Rating distribution must be a mapping, got {type(data).__name__}")
        return cls(dict(data))

    @classmethod
    def from_json(cls, raw: str) -> "RatingDistribution":
        """Parse the JSON form stored in generation settings, e.g. '{"5": 60, "4": 30}'."""
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Rating distribution is not valid JSON: {e}")
        return cls.from_mapping(data)

    def to_dict(self) -> dict:
        """JSON-serializable form with string keys."""
        return {str(rating): weight for rating, weight in self.weights.items()}
