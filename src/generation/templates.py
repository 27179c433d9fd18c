"""
Static template pools for review content, keyed by sentiment.

Title and body templates may reference {product_name} and {category}.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple

from src.models.content import POSITIVE, NEUTRAL, NEGATIVE


@dataclass(frozen=True)
class TemplatePool:
    titles: Tuple[str, ...]
    bodies: Tuple[str, ...]
    pros: Tuple[str, ...]
    cons: Tuple[str, ...]


_POSITIVE = TemplatePool(
    titles=(
        "Great {category} service!",
        "Excellent {product_name}",
        "Highly recommended!",
        "Works perfectly!",
        "Best {category} provider",
        "Amazing results with {product_name}",
        "Fast delivery, great service",
        "Excellent value for money",
        "Very satisfied with my purchase",
        "Top quality service",
    ),
    bodies=(
        "I've tried several {category} services before, but this one is definitely the best. "
        "{product_name} delivered exactly what was promised, and the results were visible quickly.",
        "Extremely satisfied with my purchase. The service works flawlessly, and customer support "
        "is responsive. Would definitely use again.",
        "The {product_name} service exceeded my expectations. Fast delivery, good quality, and "
        "excellent value for money.",
        "I've been using {product_name} for a while now, and I'm consistently impressed with the "
        "results. Highly recommended for anyone looking for a reliable {category} service.",
        "Great service from start to finish. The process was straightforward, and the results "
        "were exactly what I needed.",
    ),
    pros=(
        "Fast delivery",
        "Excellent quality",
        "Good customer support",
        "Easy to use",
        "Great value for money",
        "Reliable service",
        "Consistent results",
        "Exactly as described",
        "Visible results quickly",
        "Hassle-free process",
    ),
    cons=(
        "Minor delay in delivery",
        "Could be slightly cheaper",
        "Interface could be more intuitive",
        "More options would be nice",
        "Occasional small glitches",
    ),
)

_NEUTRAL = TemplatePool(
    titles=(
        "Decent {category} service",
        "Good but not perfect",
        "Satisfactory experience",
        "Does the job, but..",
        "Acceptable service",
        "Mixed feelings about this",
        "Average {category} service",
        "Not bad for the price",
        "Meets basic expectations",
        "Works as described",
    ),
    bodies=(
        "{product_name} is decent for the price. There are some minor issues, but overall it "
        "does what it claims to do.",
        "The service works, but delivery was slower than advertised. Customer support was "
        "helpful in resolving the issue.",
        "Average experience with {product_name}. It gets the job done, but there's definitely "
        "room for improvement.",
        "Not bad, but not great either. The {category} service works, but I've seen better "
        "quality elsewhere.",
        "Mixed results with this service. Some aspects were excellent, while others left "
        "something to be desired.",
    ),
    pros=(
        "Reasonable price",
        "Works as expected",
        "Decent quality",
        "Acceptable delivery time",
        "Responsive support",
        "Simple process",
        "Does the basic job",
        "No major issues",
        "Interface is easy to navigate",
        "Payment process is secure",
    ),
    cons=(
        "Slow delivery times",
        "Inconsistent results",
        "Limited features",
        "Customer support could be better",
        "Price is a bit high for what you get",
        "Interface needs improvement",
        "Some options are confusing",
        "Results take time to appear",
        "Documentation could be clearer",
        "No real-time tracking",
    ),
)

_NEGATIVE = TemplatePool(
    titles=(
        "Disappointed with this service",
        "Not worth the money",
        "Expected more from {product_name}",
        "Needs improvement",
        "Would not recommend",
        "Frustrating experience",
        "Too many issues",
        "Poor quality service",
        "Waste of money",
        "Doesn't deliver as promised",
    ),
    bodies=(
        "I had high hopes for {product_name}, but unfortunately, it didn't deliver as promised. "
        "The results were disappointing and not worth the price.",
        "Poor experience overall. The service was unreliable, and customer support was "
        "unresponsive when I tried to resolve issues.",
        "Would not recommend this {category} service. There are much better alternatives "
        "available for the same price.",
        "Disappointing results and slow delivery. I expected much more based on the description "
        "and reviews.",
        "Save your money and look elsewhere. This service has too many issues to be worth it.",
    ),
    pros=(
        "Some features work correctly",
        "Payment process was smooth",
        "Website is easy to navigate",
        "Good concept in theory",
        "Customer support responds eventually",
    ),
    cons=(
        "Poor quality service",
        "Extremely slow delivery",
        "Non-existent customer support",
        "Doesn't work as advertised",
        "Overpriced for what you get",
        "Confusing interface",
        "No refund policy",
        "Inconsistent results",
        "Hidden fees not mentioned",
        "No transparency in the process",
    ),
)

TEMPLATE_POOLS = MappingProxyType({
    POSITIVE: _POSITIVE,
    NEUTRAL: _NEUTRAL,
    NEGATIVE: _NEGATIVE,
})

# Inclusive (min, max) number of pros and cons per sentiment
PROS_COUNT_RANGE = MappingProxyType({POSITIVE: (2, 4), NEUTRAL: (1, 2), NEGATIVE: (1, 1)})
CONS_COUNT_RANGE = MappingProxyType({POSITIVE: (1, 1), NEUTRAL: (1, 2), NEGATIVE: (2, 4)})
