"""
Per-product review generation settings.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import config.settings as settings
from src.errors import ConfigurationError
from src.models.distribution import RatingDistribution


def _default_distribution() -> RatingDistribution:
    return RatingDistribution(dict(settings.DEFAULT_RATING_DISTRIBUTION))


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ReviewGenerationSettings:
    """
    Generation settings for one product.
    Created with defaults the first time reviews are generated for it.
    """
    product_id: int
    is_enabled: bool = True
    min_rating: int = settings.DEFAULT_MIN_RATING
    max_rating: int = settings.DEFAULT_MAX_RATING
    review_distribution: RatingDistribution = field(default_factory=_default_distribution)
    target_review_count: int = settings.DEFAULT_TARGET_REVIEW_COUNT
    daily_generation_limit: int = settings.DEFAULT_DAILY_GENERATION_LIMIT
    random_generation: bool = True
    created_at: str = field(default_factory=_utc_now)
    updated_at: str = field(default_factory=_utc_now)

    def __post_init__(self):
        if not (1 <= self.min_rating <= self.max_rating <= 5):
            raise ConfigurationError(
                f"Invalid rating range [{self.min_rating}, {self.max_rating}] "
                f"for product {self.product_id}"
            )
        if self.daily_generation_limit < 0:
            raise ConfigurationError(
                f"daily_generation_limit must be non-negative for product {self.product_id}"
            )
        self.review_distribution = RatingDistribution.from_mapping(self.review_distribution)

    def effective_distribution(self) -> RatingDistribution:
        """Configured distribution with ratings outside [min_rating, max_rating] zeroed."""
        return self.review_distribution.restricted_to(self.min_rating, self.max_rating)

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewGenerationSettings":
        raw_distribution = data.get("review_distribution")
        if raw_distribution is None:
            distribution = _default_distribution()
        elif isinstance(raw_distribution, str):
            # Settings rows may store the distribution as a JSON string
            distribution = RatingDistribution.from_json(raw_distribution)
        else:
            distribution = RatingDistribution.from_mapping(raw_distribution)

        return cls(
            product_id=int(data["product_id"]),
            is_enabled=data.get("is_enabled", True),
            min_rating=data.get("min_rating", settings.DEFAULT_MIN_RATING),
            max_rating=data.get("max_rating", settings.DEFAULT_MAX_RATING),
            review_distribution=distribution,
            target_review_count=data.get("target_review_count", settings.DEFAULT_TARGET_REVIEW_COUNT),
            daily_generation_limit=data.get("daily_generation_limit", settings.DEFAULT_DAILY_GENERATION_LIMIT),
            random_generation=data.get("random_generation", True),
            created_at=data.get("created_at") or _utc_now(),
            updated_at=data.get("updated_at") or _utc_now()
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "is_enabled": self.is_enabled,
            "min_rating": self.min_rating,
            "max_rating": self.max_rating,
            "review_distribution": self.review_distribution.to_dict(),
            "target_review_count": self.target_review_count,
            "daily_generation_limit": self.daily_generation_limit,
            "random_generation": self.random_generation,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }
