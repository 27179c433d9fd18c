"""
Content Composer.

Builds review title, body, pros and cons from static template pools,
selected by the sentiment of the review's rating.
"""

import logging
import random
from typing import List, Mapping, Sequence, Tuple

from src.models.content import ComposedContent, sentiment_for_rating
from src.generation.templates import (
    TEMPLATE_POOLS,
    PROS_COUNT_RANGE,
    CONS_COUNT_RANGE,
    TemplatePool,
)

logger = logging.getLogger(__name__)


class ContentComposer:
    """
    Composes review text for a product.

    Every call is independent: pros and cons are unique within one call,
    nothing is remembered across calls.
    """

    def __init__(
        self,
        rng: random.Random = None,
        pools: Mapping[str, TemplatePool] = TEMPLATE_POOLS,
        pros_range: Mapping[str, Tuple[int, int]] = PROS_COUNT_RANGE,
        cons_range: Mapping[str, Tuple[int, int]] = CONS_COUNT_RANGE
    ):
        """
        Initialize content composer.

        Args:
            rng: Random source
            pools: Template pool per sentiment
            pros_range: Inclusive pros count range per sentiment
            cons_range: Inclusive cons count range per sentiment
        """
        self.rng = rng or random.Random()
        self.pools = pools
        self.pros_range = pros_range
        self.cons_range = cons_range

    def compose(self, product_name: str, category: str, rating: int) -> ComposedContent:
        """
        Compose content for one review.

        Args:
            product_name: Product name substituted into templates
            category: Product category substituted into templates
            rating: Star rating (1-5) that selects the sentiment pool

        Returns:
            ComposedContent with title, content, pros and cons
        """
        sentiment = sentiment_for_rating(rating)
        pool = self.pools[sentiment]

        title = self._fill(self.rng.choice(pool.titles), product_name, category)
        content = self._fill(self.rng.choice(pool.bodies), product_name, category)

        pros_count = self.rng.randint(*self.pros_range[sentiment])
        cons_count = self.rng.randint(*self.cons_range[sentiment])

        pros = self._pick_unique(pool.pros, pros_count)
        cons = self._pick_unique(pool.cons, cons_count)

        logger.debug(
            f"Composed {sentiment} content for '{product_name}': "
            f"{len(pros)} pros, {len(cons)} cons"
        )

        return ComposedContent(
            title=title,
            content=content,
            pros=pros,
            cons=cons,
            sentiment=sentiment
        )

    def _pick_unique(self, pool: Sequence[str], count: int) -> List[str]:
        """Shuffle a copy of the pool and take the first `count` entries."""
        # dict.fromkeys drops repeated pool entries while keeping order
        candidates = list(dict.fromkeys(pool))
        self.rng.shuffle(candidates)
        return candidates[:count]

    @staticmethod
    def _fill(template: str, product_name: str, category: str) -> str:
        # format() only parses the template, substituted values are inserted as-is
        return template.format(product_name=product_name, category=category)
