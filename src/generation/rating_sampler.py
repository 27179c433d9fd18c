"""
Rating Sampler.

Draws a 1-5 star rating from a weighted discrete distribution.
"""

import logging
import random
from typing import Mapping, Union

import config.settings as settings
from src.models.distribution import RatingDistribution

logger = logging.getLogger(__name__)


class RatingSampler:
    """
    Weighted rating sampler.

    Stateless apart from the injected random source.
    """

    def __init__(self, rng: random.Random = None, fallback_rating: int = settings.FALLBACK_RATING):
        """
        Initialize rating sampler.

        Args:
            rng: Random source (a fresh unseeded Random if omitted)
            fallback_rating: Returned if cumulative weights never reach the draw
        """
        self.rng = rng or random.Random()
        self.fallback_rating = fallback_rating

    def sample(self, distribution: Union[RatingDistribution, Mapping]) -> int:
        """
        Draw one rating.

        Args:
            distribution: RatingDistribution or raw rating -> weight mapping

        Returns:
            Rating in 1-5

        Raises:
            ConfigurationError: If the distribution is invalid or has zero total weight
        """
        return sample_rating(distribution, self.rng, self.fallback_rating)


def sample_rating(
    distribution: Union[RatingDistribution, Mapping],
    rng: random.Random,
    fallback_rating: int = settings.FALLBACK_RATING
) -> int:
    """Cumulative-weight draw over ratings in ascending order."""
    distribution = RatingDistribution.from_mapping(distribution)

    r = rng.uniform(0, distribution.total_weight)

    cumulative = 0
    for rating, weight in distribution.weights.items():
        if weight <= 0:
            continue
        cumulative += weight
        if cumulative >= r:
            return rating

    logger.debug(f"Draw {r} exceeded cumulative weight {cumulative}, using fallback {fallback_rating}")
    return fallback_rating
