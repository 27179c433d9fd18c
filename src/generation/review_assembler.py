"""
Review Assembler.

Attaches randomized metadata (country, device, platform, verified flag,
backdated timestamp, author name) to composed review content.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from faker import Faker

import config.settings as settings
from src.errors import ConfigurationError
from src.models.content import ComposedContent
from src.models.review import GeneratedReview

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuxiliaryPools:
    """Value pools the assembler draws review metadata from."""
    country_codes: Sequence[str]
    device_types: Sequence[str] = settings.DEVICE_TYPES
    platforms: Sequence[str] = settings.PLATFORMS

    def validate(self) -> None:
        if not self.country_codes:
            raise ConfigurationError("Country code list must not be empty")
        if not self.device_types:
            raise ConfigurationError("Device type list must not be empty")
        if not self.platforms:
            raise ConfigurationError("Platform list must not be empty")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReviewAssembler:
    """
    Combines composed content with random metadata into a GeneratedReview.
    """

    def __init__(
        self,
        rng: random.Random = None,
        fake: Faker = None,
        clock: Callable[[], datetime] = _utc_now,
        verified_probability: float = settings.VERIFIED_PURCHASE_PROBABILITY,
        max_backdate_days: int = settings.MAX_BACKDATE_DAYS
    ):
        """
        Initialize review assembler.

        Args:
            rng: Random source for all metadata draws
            fake: Faker instance for author names
            clock: Returns the current time; created_at is backdated from it
            verified_probability: Chance a review is flagged as verified purchase
            max_backdate_days: Upper bound (inclusive) of the created_at offset
        """
        self.rng = rng or random.Random()
        self.fake = fake or Faker(settings.FAKER_LOCALE)
        self.clock = clock
        self.verified_probability = verified_probability
        self.max_backdate_days = max_backdate_days

    def assemble(
        self,
        product_id: int,
        composed: ComposedContent,
        rating: int,
        aux_pools: AuxiliaryPools
    ) -> GeneratedReview:
        """
        Build one review.

        Args:
            product_id: Product the review belongs to
            composed: Title, content, pros and cons
            rating: Sampled star rating
            aux_pools: Country, device and platform pools

        Returns:
            GeneratedReview

        Raises:
            ConfigurationError: If any metadata pool is empty
        """
        aux_pools.validate()

        backdate_days = self.rng.randint(0, self.max_backdate_days)
        created_at = self.clock() - timedelta(days=backdate_days)

        review = GeneratedReview(
            product_id=product_id,
            rating=rating,
            title=composed.title,
            content=composed.content,
            pros=tuple(composed.pros),
            cons=tuple(composed.cons),
            verified_purchase=self.rng.random() < self.verified_probability,
            country_code=self.rng.choice(list(aux_pools.country_codes)),
            device_type=self.rng.choice(list(aux_pools.device_types)),
            platform=self.rng.choice(list(aux_pools.platforms)),
            created_at=created_at,
            author_name=self.fake.name(),
            source=settings.REVIEW_SOURCE
        )

        logger.debug(
            f"Assembled {rating}-star review for product {product_id} "
            f"({review.country_code}, {review.device_type}, backdated {backdate_days}d)"
        )
        return review
