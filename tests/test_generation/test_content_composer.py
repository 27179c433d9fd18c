"""
Unit tests for the Content Composer.
"""

import random

import pytest

from src.generation.content_composer import ContentComposer
from src.generation.templates import TEMPLATE_POOLS, TemplatePool
from src.models.content import sentiment_for_rating, POSITIVE, NEUTRAL, NEGATIVE


@pytest.fixture
def composer():
    return ContentComposer(rng=random.Random(42))


@pytest.mark.parametrize("rating,expected", [
    (5, POSITIVE),
    (4, POSITIVE),
    (3, NEUTRAL),
    (2, NEGATIVE),
    (1, NEGATIVE),
])
def test_sentiment_mapping(rating, expected):
    assert sentiment_for_rating(rating) == expected


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_sentiment_mapping_rejects_invalid_rating(rating):
    with pytest.raises(ValueError):
        sentiment_for_rating(rating)


@pytest.mark.parametrize("rating,pros_bounds,cons_bounds", [
    (5, (2, 4), (1, 1)),
    (4, (2, 4), (1, 1)),
    (3, (1, 2), (1, 2)),
    (2, (1, 1), (2, 4)),
    (1, (1, 1), (2, 4)),
])
def test_pros_cons_count_bounds(composer, rating, pros_bounds, cons_bounds):
    for _ in range(200):
        content = composer.compose("Twitch Viewers", "viewers", rating)
        assert pros_bounds[0] <= len(content.pros) <= pros_bounds[1]
        assert cons_bounds[0] <= len(content.cons) <= cons_bounds[1]


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_no_duplicate_pros_or_cons(composer, rating):
    for _ in range(200):
        content = composer.compose("Twitch Viewers", "viewers", rating)
        assert len(set(content.pros)) == len(content.pros)
        assert len(set(content.cons)) == len(content.cons)


def test_content_drawn_from_sentiment_pool(composer):
    pool = TEMPLATE_POOLS[NEGATIVE]
    content = composer.compose("Kick Chatters", "chat", 1)

    assert content.sentiment == NEGATIVE
    assert set(content.pros) <= set(pool.pros)
    assert set(content.cons) <= set(pool.cons)


def test_placeholders_substituted():
    # Pool with only placeholder templates so substitution is always exercised
    pools = {
        POSITIVE: TemplatePool(
            titles=("Best {category} from {product_name}",),
            bodies=("{product_name} is a {category} product",),
            pros=("Fast delivery", "Good quality"),
            cons=("Pricey",),
        )
    }
    composer = ContentComposer(rng=random.Random(0), pools=pools)
    content = composer.compose("YouTube Views", "views", 5)

    assert content.title == "Best views from YouTube Views"
    assert content.content == "YouTube Views is a views product"


def test_product_name_with_braces_inserted_verbatim():
    pools = {
        POSITIVE: TemplatePool(
            titles=("Excellent {product_name}",),
            bodies=("I bought {product_name} in {category}.",),
            pros=("Fast delivery", "Good quality"),
            cons=("Pricey",),
        )
    }
    composer = ContentComposer(rng=random.Random(0), pools=pools)
    content = composer.compose("Pack {category} {0}", "followers", 5)

    assert content.title == "Excellent Pack {category} {0}"
    assert content.content == "I bought Pack {category} {0} in followers."


def test_small_pool_returns_everything_without_error():
    pools = {
        NEGATIVE: TemplatePool(
            titles=("Bad",),
            bodies=("Bad service",),
            pros=("Cheap",),
            cons=("Slow",),  # smaller than the 2-4 cons requested
        )
    }
    composer = ContentComposer(rng=random.Random(5), pools=pools)

    for _ in range(20):
        content = composer.compose("X", "y", 1)
        assert content.pros == ["Cheap"]
        assert content.cons == ["Slow"]


def test_compose_does_not_mutate_pools(composer):
    before = {s: (p.pros, p.cons) for s, p in TEMPLATE_POOLS.items()}
    for rating in range(1, 6):
        composer.compose("Twitch Followers", "followers", rating)
    after = {s: (p.pros, p.cons) for s, p in TEMPLATE_POOLS.items()}
    assert before == after


def test_every_sentiment_has_complete_pool():
    for sentiment in (POSITIVE, NEUTRAL, NEGATIVE):
        pool = TEMPLATE_POOLS[sentiment]
        assert pool.titles and pool.bodies and pool.pros and pool.cons
