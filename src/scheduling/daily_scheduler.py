"""
Daily Review Scheduler.

Plans up to a few reviews per active product for the day and spreads
their publication times across the next 23 hours. The caller polls
run_due() to generate the reviews whose time has come.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Tuple

from src.errors import ReviewGenerationError
from src.models.product import Product
from src.orchestrator import GenerationOrchestrator
from src.registry.settings_registry import GenerationSettingsRegistry
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledReview:
    product: Product
    publish_at: datetime
    sequence: int  # 1-based position among the product's reviews for the day

    def to_dict(self) -> dict:
        return {
            "product": self.product.to_dict(),
            "publish_at": self.publish_at.isoformat(),
            "sequence": self.sequence
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledReview":
        return cls(
            product=Product.from_dict(data["product"]),
            publish_at=datetime.fromisoformat(data["publish_at"]),
            sequence=data.get("sequence", 1)
        )


class DailyReviewScheduler:
    """
    Plans and executes the daily trickle of generated reviews.
    """

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        settings_registry: GenerationSettingsRegistry,
        rng: random.Random = None,
        max_per_product: int = settings.MAX_DAILY_REVIEWS_PER_PRODUCT
    ):
        """
        Initialize scheduler.

        Args:
            orchestrator: Generates and persists reviews
            settings_registry: Per-product enable flag and daily limit
            rng: Random source for counts and delays
            max_per_product: Hard cap on reviews per product per day
        """
        self.orchestrator = orchestrator
        self.settings_registry = settings_registry
        self.rng = rng or orchestrator.rng
        self.max_per_product = max_per_product

    def plan(self, products: List[Product], now: datetime) -> List[ScheduledReview]:
        """
        Build today's schedule.

        Args:
            products: Product catalog (inactive products are skipped)
            now: Start of the scheduling window

        Returns:
            Scheduled reviews sorted by publish time
        """
        active = [p for p in products if p.is_active]
        logger.info(f"Scheduling reviews for {len(active)} active products")

        schedule = []
        for product in active:
            product_settings = self.settings_registry.get(product.id)
            if product_settings is not None and not product_settings.is_enabled:
                logger.info(f"Skipping product {product.id}: {product.name} - generation disabled")
                continue

            limit = self.max_per_product
            if product_settings is not None:
                limit = min(limit, product_settings.daily_generation_limit)

            review_count = self.rng.randint(0, limit) if limit > 0 else 0
            if review_count == 0:
                logger.info(f"Skipping product {product.id}: {product.name} - no reviews scheduled today")
                continue

            logger.info(f"Scheduling {review_count} reviews for product {product.id}: {product.name}")

            for i in range(review_count):
                delay_minutes = self.rng.randint(
                    settings.MIN_SCHEDULE_DELAY_MINUTES,
                    settings.MAX_SCHEDULE_DELAY_MINUTES
                )
                schedule.append(ScheduledReview(
                    product=product,
                    publish_at=now + timedelta(minutes=delay_minutes),
                    sequence=i + 1
                ))
                logger.debug(f"  - Scheduled review #{i + 1} in {delay_minutes} minutes")

        return sorted(schedule, key=lambda s: s.publish_at)

    def run_due(
        self,
        schedule: List[ScheduledReview],
        now: datetime
    ) -> Tuple[List[ScheduledReview], List[ScheduledReview]]:
        """
        Generate and persist every review due at or before `now`.

        A failure for one entry is logged and does not stop the others.

        Returns:
            (pending, failed): entries not yet due, and due entries whose
            review could not be generated or stored
        """
        pending = []
        failed = []
        for entry in schedule:
            if entry.publish_at > now:
                pending.append(entry)
                continue

            try:
                report = self.orchestrator.generate_and_persist(entry.product, count=1)
            except ReviewGenerationError as e:
                logger.error(f"Error adding scheduled review for product {entry.product.id}: {e}")
                failed.append(entry)
                continue

            if report.success:
                logger.info(
                    f"Added automated review for product {entry.product.id}: "
                    f"\"{report.stored[0]['title']}\" ({report.stored[0]['rating']}★)"
                )
            else:
                failed.append(entry)

        logger.info(
            f"Processed {len(schedule) - len(pending)} due reviews "
            f"({len(failed)} failed), {len(pending)} pending"
        )
        return pending, failed
