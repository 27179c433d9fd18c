"""
Unit tests for data models.
"""

from datetime import datetime, timezone

import pytest

from src.errors import ConfigurationError
from src.models.distribution import RatingDistribution
from src.models.product import Product
from src.models.review import GeneratedReview


def test_distribution_coerces_string_keys_and_sorts():
    distribution = RatingDistribution({"5": 60, "1": 1, "3": 8})
    assert list(distribution.weights) == [1, 3, 5]


def test_distribution_probability_normalized():
    distribution = RatingDistribution({5: 3, 4: 1})
    assert distribution.probability(5) == 0.75
    assert distribution.probability(2) == 0


@pytest.mark.parametrize("weights", [
    {6: 1},
    {0: 1},
    {"five": 1},
    {5: -1},
    {5: "60"},
    {5: 0, 4: 0},
    {},
])
def test_distribution_invalid_rejected(weights):
    with pytest.raises(ConfigurationError):
        RatingDistribution(weights)


def test_distribution_from_json():
    distribution = RatingDistribution.from_json('{"5": 60, "4": 30}')
    assert distribution.to_dict() == {"4": 30, "5": 60}

    with pytest.raises(ConfigurationError):
        RatingDistribution.from_json("{not json")
    with pytest.raises(ConfigurationError):
        RatingDistribution.from_json("[60, 30]")


def test_review_rating_validation():
    with pytest.raises(ValueError):
        GeneratedReview(product_id=1, rating=0, title="t", content="c")
    with pytest.raises(ValueError):
        GeneratedReview(product_id=1, rating=6, title="t", content="c")


def test_review_serialization():
    review = GeneratedReview(
        product_id=1,
        rating=3,
        title="Decent service",
        content="Does the job.",
        pros=["Reasonable price"],
        cons=["Slow delivery times"],
        country_code="FR",
        created_at=datetime(2024, 6, 10, 8, 30, tzinfo=timezone.utc)
    )

    data = review.to_dict()
    assert data["created_at"] == "2024-06-10T08:30:00+00:00"
    assert data["source"] == "auto"
    assert GeneratedReview.from_dict(data) == review
    assert review.sentiment == "neutral"


def test_review_is_immutable():
    review = GeneratedReview(product_id=1, rating=5, title="t", content="c")
    with pytest.raises(AttributeError):
        review.rating = 1


def test_review_pros_and_cons_are_immutable():
    pros = ["Fast delivery"]
    review = GeneratedReview(product_id=1, rating=5, title="t", content="c", pros=pros, cons=["Pricey"])

    assert review.pros == ("Fast delivery",)
    assert review.cons == ("Pricey",)
    with pytest.raises(AttributeError):
        review.pros.append("Extra")

    pros.append("Extra")
    assert review.pros == ("Fast delivery",)
    assert review.to_dict()["pros"] == ["Fast delivery"]


def test_product_default_category():
    assert Product(id=1, name="Twitch Viewers").category == "digital service"
    assert Product.from_dict({"id": "2", "name": "X", "category": None}).category == "digital service"
