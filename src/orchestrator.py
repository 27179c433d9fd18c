"""
Generation Orchestrator.

Drives the per-review loop: sample rating -> compose content -> assemble review,
and hands the batch to the review store.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

from faker import Faker

from src.errors import ConfigurationError, InvalidRequestError, PersistenceError
from src.generation.rating_sampler import RatingSampler
from src.generation.content_composer import ContentComposer
from src.generation.review_assembler import ReviewAssembler, AuxiliaryPools
from src.models.distribution import RatingDistribution
from src.models.generation_settings import ReviewGenerationSettings
from src.models.product import Product
from src.models.review import GeneratedReview
from src.registry.settings_registry import GenerationSettingsRegistry
from src.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class PersistenceFailure:
    index: int  # Position of the review in the generated batch
    error: str


@dataclass
class GenerationReport:
    """Outcome of generate_and_persist: stored records plus per-item failures."""
    product_id: int
    requested: int
    stored: List[Dict] = field(default_factory=list)
    failures: List[PersistenceFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def stored_count(self) -> int:
        return len(self.stored)


class GenerationOrchestrator:
    """
    Orchestrates review generation for one product at a time.

    Iterations are independent; each review draws fresh randomness
    from the shared random source.
    """

    def __init__(
        self,
        storage: StorageManager = None,
        settings_registry: GenerationSettingsRegistry = None,
        seed: Optional[int] = None,
        rng: random.Random = None,
        fake: Faker = None,
        assembler: ReviewAssembler = None,
        min_batch_size: int = settings.MIN_BATCH_SIZE,
        max_batch_size: int = settings.MAX_BATCH_SIZE
    ):
        """
        Initialize generation orchestrator.

        Args:
            storage: Review store (required for generate_and_persist)
            settings_registry: Per-product settings (required when no distribution is passed)
            seed: Seed for a reproducible random source and Faker
            rng: Explicit random source (takes precedence over seed)
            fake: Faker instance for author names
            assembler: Custom assembler (e.g. with a fixed clock)
            min_batch_size: Smallest accepted batch
            max_batch_size: Largest accepted batch
        """
        self.storage = storage
        self.settings_registry = settings_registry
        self.rng = rng or random.Random(seed)

        if fake is None:
            fake = Faker(settings.FAKER_LOCALE)
            if seed is not None:
                fake.seed_instance(seed)

        self.sampler = RatingSampler(rng=self.rng)
        self.composer = ContentComposer(rng=self.rng)
        self.assembler = assembler or ReviewAssembler(rng=self.rng, fake=fake)
        self.min_batch_size = min_batch_size
        self.max_batch_size = max_batch_size

        logger.info(
            f"Initialized GenerationOrchestrator "
            f"(batch size {min_batch_size}-{max_batch_size}, seed={seed})"
        )

    def generate(
        self,
        product_id: int,
        count: int,
        distribution: Union[RatingDistribution, Mapping],
        country_list: Sequence[str],
        product_name: Optional[str] = None,
        category: str = settings.DEFAULT_CATEGORY
    ) -> List[GeneratedReview]:
        """
        Generate a batch of reviews for a product.

        All inputs are validated before the first review is generated,
        so a bad request never yields a partial batch.

        Args:
            product_id: Product to generate reviews for
            count: Number of reviews (min_batch_size..max_batch_size)
            distribution: Rating weights
            country_list: ISO country codes to draw from
            product_name: Name used in templates (defaults to "Product <id>")
            category: Category used in templates

        Returns:
            List of GeneratedReview, in generation order

        Raises:
            InvalidRequestError: If count is out of range
            ConfigurationError: If distribution or country list is invalid
        """
        self._validate_count(count)
        distribution = RatingDistribution.from_mapping(distribution)
        aux_pools = AuxiliaryPools(country_codes=tuple(country_list or ()))
        aux_pools.validate()

        product_name = product_name or f"Product {product_id}"
        category = category or settings.DEFAULT_CATEGORY

        reviews = []
        for _ in range(count):
            rating = self.sampler.sample(distribution)
            composed = self.composer.compose(product_name, category, rating)
            review = self.assembler.assemble(product_id, composed, rating, aux_pools)
            reviews.append(review)

        logger.info(
            f"Generated {len(reviews)} reviews for product {product_id} "
            f"(ratings: {[r.rating for r in reviews]})"
        )
        return reviews

    def generate_and_persist(
        self,
        product: Product,
        count: int,
        distribution: Union[RatingDistribution, Mapping, None] = None,
        country_list: Optional[Sequence[str]] = None
    ) -> GenerationReport:
        """
        Generate a batch and insert each review into the review store.

        A failed insert is recorded in the report and the remaining reviews
        are still attempted.

        Args:
            product: Product to generate reviews for
            count: Number of reviews
            distribution: Rating weights, defaults to the product's effective settings distribution
            country_list: ISO country codes, defaults to settings.DEFAULT_COUNTRY_CODES

        Returns:
            GenerationReport with stored records and failures
        """
        if self.storage is None:
            raise ConfigurationError("generate_and_persist requires a review store")

        if distribution is None:
            distribution = self._distribution_for(product.id)
        if country_list is None:
            country_list = settings.DEFAULT_COUNTRY_CODES

        reviews = self.generate(
            product_id=product.id,
            count=count,
            distribution=distribution,
            country_list=country_list,
            product_name=product.name,
            category=product.category
        )

        report = GenerationReport(product_id=product.id, requested=count)
        for index, review in enumerate(reviews):
            try:
                record = self.storage.insert_review(product.id, review, source=settings.REVIEW_SOURCE)
                report.stored.append(record)
            except PersistenceError as e:
                logger.error(f"Failed to persist review {index} for product {product.id}: {e}")
                report.failures.append(PersistenceFailure(index=index, error=str(e)))

        if report.failures:
            logger.warning(
                f"Stored {report.stored_count}/{count} reviews for product {product.id}, "
                f"failed indices: {[f.index for f in report.failures]}"
            )
        else:
            logger.info(f"Stored {report.stored_count} reviews for product {product.id}")

        return report

    def _distribution_for(self, product_id: int) -> RatingDistribution:
        """Effective distribution from the product's settings, created on first use."""
        if self.settings_registry is None:
            return ReviewGenerationSettings(product_id=product_id).effective_distribution()

        existed = self.settings_registry.get(product_id) is not None
        product_settings = self.settings_registry.get_or_create(product_id)
        if not existed:
            self.settings_registry.save()

        return product_settings.effective_distribution()

    def _validate_count(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidRequestError(f"Review count must be an integer, got {count!r}")
        if not (self.min_batch_size <= count <= self.max_batch_size):
            raise InvalidRequestError(
                f"Review count must be between {self.min_batch_size} and "
                f"{self.max_batch_size}, got {count}"
            )
