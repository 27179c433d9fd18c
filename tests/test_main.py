"""
Tests for the CLI's scheduled-review runner.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import main
from src.errors import PersistenceError
from src.models.product import Product
from src.orchestrator import GenerationOrchestrator
from src.registry.settings_registry import GenerationSettingsRegistry
from src.scheduling.daily_scheduler import ScheduledReview
from src.utils.storage import StorageManager

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _setup(tmpdir):
    storage = StorageManager(tmpdir)
    registry = GenerationSettingsRegistry(os.path.join(tmpdir, "settings.json"))
    orchestrator = GenerationOrchestrator(storage=storage, settings_registry=registry, seed=3)
    return storage, registry, orchestrator


def test_run_due_failure_keeps_entry_queued_and_returns_false():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage, registry, orchestrator = _setup(tmpdir)
        product = Product(id=1, name="Twitch Viewers", category="viewers")
        due = ScheduledReview(product=product, publish_at=NOW - timedelta(minutes=1), sequence=1)
        later = ScheduledReview(product=product, publish_at=NOW + timedelta(hours=2), sequence=2)
        storage.save_schedule([due.to_dict(), later.to_dict()])

        with patch.object(storage, "insert_review", side_effect=PersistenceError("disk full", product_id=1)):
            ok = main.run_due(orchestrator, storage, registry, now=NOW)

        assert ok is False
        remaining = [ScheduledReview.from_dict(e) for e in storage.load_schedule()]
        assert remaining == [due, later]
        assert storage.load_reviews(1) == []


def test_run_due_success_removes_entry_and_returns_true():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage, registry, orchestrator = _setup(tmpdir)
        product = Product(id=1, name="Twitch Viewers", category="viewers")
        due = ScheduledReview(product=product, publish_at=NOW - timedelta(minutes=1), sequence=1)
        storage.save_schedule([due.to_dict()])

        ok = main.run_due(orchestrator, storage, registry, now=NOW)

        assert ok is True
        assert storage.load_schedule() == []
        assert len(storage.load_reviews(1)) == 1
