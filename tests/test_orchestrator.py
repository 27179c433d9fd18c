"""
Tests for the Generation Orchestrator.

Storage is mocked or backed by a temporary directory.
"""

import os
import random
import tempfile
from unittest.mock import MagicMock

import pytest

from src.errors import ConfigurationError, InvalidRequestError, PersistenceError
from src.models.product import Product
from src.orchestrator import GenerationOrchestrator
from src.registry.settings_registry import GenerationSettingsRegistry
from src.utils.storage import StorageManager


@pytest.fixture
def orchestrator():
    return GenerationOrchestrator(seed=2024)


def test_end_to_end_scenario(orchestrator):
    """Five positive reviews for product 42 drawn from the given countries."""
    reviews = orchestrator.generate(
        product_id=42,
        count=5,
        distribution={5: 100},
        country_list=["US", "DE"]
    )

    assert len(reviews) == 5
    for review in reviews:
        assert review.product_id == 42
        assert review.rating == 5
        assert review.sentiment == "positive"
        assert 2 <= len(review.pros) <= 4
        assert len(review.cons) == 1
        assert review.country_code in {"US", "DE"}


@pytest.mark.parametrize("count", [1, 20])
def test_batch_size_bounds_accepted(orchestrator, count):
    reviews = orchestrator.generate(42, count, {5: 60, 4: 30, 3: 8, 2: 1, 1: 1}, ["US"])
    assert len(reviews) == count


@pytest.mark.parametrize("count", [0, 21, -3])
def test_batch_size_out_of_range_rejected(orchestrator, count):
    with pytest.raises(InvalidRequestError):
        orchestrator.generate(42, count, {5: 100}, ["US"])


def test_non_integer_count_rejected(orchestrator):
    with pytest.raises(InvalidRequestError):
        orchestrator.generate(42, 2.5, {5: 100}, ["US"])


def test_zero_weight_distribution_fails_before_generation():
    orchestrator = GenerationOrchestrator(seed=1)
    orchestrator.composer = MagicMock()

    with pytest.raises(ConfigurationError):
        orchestrator.generate(42, 5, {5: 0, 4: 0}, ["US"])

    orchestrator.composer.compose.assert_not_called()


def test_empty_country_list_fails_before_generation():
    orchestrator = GenerationOrchestrator(seed=1)
    orchestrator.composer = MagicMock()

    with pytest.raises(ConfigurationError):
        orchestrator.generate(42, 5, {5: 100}, [])

    orchestrator.composer.compose.assert_not_called()


def test_product_name_and_category_reach_templates():
    orchestrator = GenerationOrchestrator(seed=8)
    reviews = orchestrator.generate(
        7, 20, {5: 1}, ["US"], product_name="ZZTestProduct", category="zzcategory"
    )
    text = " ".join(r.title + " " + r.content for r in reviews)
    assert "ZZTestProduct" in text or "zzcategory" in text


def test_same_seed_reproducible():
    first = GenerationOrchestrator(seed=5).generate(1, 10, {5: 60, 4: 30, 3: 10}, ["US", "DE", "FR"])
    second = GenerationOrchestrator(seed=5).generate(1, 10, {5: 60, 4: 30, 3: 10}, ["US", "DE", "FR"])

    strip = lambda r: (r.rating, r.title, r.content, tuple(r.pros), tuple(r.cons),
                       r.country_code, r.device_type, r.platform, r.verified_purchase, r.author_name)
    assert [strip(r) for r in first] == [strip(r) for r in second]


def test_generate_and_persist_stores_every_review():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        orchestrator = GenerationOrchestrator(storage=storage, seed=3)
        product = Product(id=42, name="Twitch Viewers", category="viewers")

        report = orchestrator.generate_and_persist(product, 5, {5: 100}, ["US", "DE"])

        assert report.success
        assert report.stored_count == 5
        assert [r["id"] for r in report.stored] == [1, 2, 3, 4, 5]
        assert all(r["source"] == "auto" for r in report.stored)
        assert len(storage.load_reviews(42)) == 5


def test_generate_and_persist_collects_failures_and_continues():
    """A failed insert is reported and later reviews are still stored."""
    storage = MagicMock()
    calls = {"n": 0}

    def insert(product_id, review, source):
        calls["n"] += 1
        if calls["n"] == 2:
            raise PersistenceError("disk full", product_id)
        return {"id": calls["n"], **review.to_dict()}

    storage.insert_review.side_effect = insert

    orchestrator = GenerationOrchestrator(storage=storage, seed=4)
    report = orchestrator.generate_and_persist(
        Product(id=9, name="Kick Followers"), 4, {4: 1}, ["GB"]
    )

    assert not report.success
    assert report.stored_count == 3
    assert [f.index for f in report.failures] == [1]
    assert "disk full" in report.failures[0].error
    assert storage.insert_review.call_count == 4


def test_generate_and_persist_reports_malformed_review_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        with open(os.path.join(storage.reviews_dir, "42.json"), "w") as f:
            f.write("[1, 2]")
        orchestrator = GenerationOrchestrator(storage=storage, seed=5)

        report = orchestrator.generate_and_persist(
            Product(id=42, name="Twitch Viewers"), 2, {5: 1}, ["US"]
        )

        assert not report.success
        assert report.stored_count == 0
        assert [f.index for f in report.failures] == [0, 1]


def test_generate_and_persist_uses_product_settings():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        registry_path = os.path.join(tmpdir, "generation_settings.json")
        registry = GenerationSettingsRegistry(registry_path)
        registry.update(42, min_rating=4, max_rating=4)

        orchestrator = GenerationOrchestrator(storage=storage, settings_registry=registry, seed=6)
        report = orchestrator.generate_and_persist(Product(id=42, name="Twitch Viewers"), 10)

        assert {r["rating"] for r in report.stored} == {4}


def test_generate_and_persist_creates_default_settings():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        registry_path = os.path.join(tmpdir, "generation_settings.json")
        registry = GenerationSettingsRegistry(registry_path)

        orchestrator = GenerationOrchestrator(storage=storage, settings_registry=registry, seed=6)
        report = orchestrator.generate_and_persist(Product(id=3, name="YouTube Views"), 20)

        # Default settings restrict ratings to 3-5
        assert {r["rating"] for r in report.stored} <= {3, 4, 5}
        assert os.path.exists(registry_path)
        assert GenerationSettingsRegistry(registry_path).get(3) is not None


def test_generate_and_persist_without_registry_uses_default_rating_range():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        orchestrator = GenerationOrchestrator(storage=storage, seed=8)

        stored = []
        for _ in range(5):
            report = orchestrator.generate_and_persist(Product(id=5, name="Kick Viewers"), 20)
            stored.extend(report.stored)

        assert len(stored) == 100
        assert {r["rating"] for r in stored} <= {3, 4, 5}


def test_generate_and_persist_requires_storage(orchestrator):
    with pytest.raises(ConfigurationError):
        orchestrator.generate_and_persist(Product(id=1, name="X"), 1, {5: 1}, ["US"])


def test_explicit_rng_used():
    rng = random.Random(10)
    orchestrator = GenerationOrchestrator(rng=rng)
    assert orchestrator.rng is rng
    assert orchestrator.sampler.rng is rng
    assert orchestrator.composer.rng is rng
