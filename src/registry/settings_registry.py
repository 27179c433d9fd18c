"""
Generation Settings Registry - per-product review generation settings.

Manages settings lookup, get-or-create with defaults, and persistence.
"""

import json
import os
import shutil
import logging
from typing import Dict, List, Optional
from datetime import datetime, timezone

from src.errors import ConfigurationError
from src.models.generation_settings import ReviewGenerationSettings

logger = logging.getLogger(__name__)


class GenerationSettingsRegistry:
    """
    JSON-backed store of ReviewGenerationSettings keyed by product id.
    """

    def __init__(self, registry_path: str):
        """
        Initialize registry from disk or create new empty registry.

        Args:
            registry_path: Path to generation_settings.json file
        """
        self.registry_path = registry_path
        self.settings: Dict[int, ReviewGenerationSettings] = {}  # product_id -> settings
        self.version = "1.0.0"
        self.last_updated = datetime.now(timezone.utc).isoformat()

        # Load existing registry if it exists
        if os.path.exists(registry_path):
            self._load()
        else:
            logger.info(f"No existing settings registry at {registry_path}, initializing empty registry")

    def _load(self) -> None:
        """Load registry from disk."""
        try:
            with open(self.registry_path, 'r') as f:
                data = json.load(f)

            self.version = data.get("version", "1.0.0")
            self.last_updated = data.get("last_updated", self.last_updated)

            self.settings = {}
            for item in data.get("settings", []):
                entry = ReviewGenerationSettings.from_dict(item)
                self.settings[entry.product_id] = entry

            logger.info(f"Loaded generation settings for {len(self.settings)} products")

        except (json.JSONDecodeError, AttributeError) as e:
            logger.error(f"Failed to parse settings registry JSON: {e}")
            self._try_restore_from_backup()
        except (KeyError, ValueError, OSError) as e:
            # ConfigurationError is a ValueError
            logger.error(f"Failed to load settings registry: {e}")
            self._try_restore_from_backup()

    def _try_restore_from_backup(self) -> None:
        """Attempt to restore from backup file if main registry is corrupted."""
        backup_path = f"{self.registry_path}.backup"
        if os.path.exists(backup_path):
            logger.warning(f"Attempting to restore settings from backup: {backup_path}")
            try:
                with open(backup_path, 'r') as f:
                    data = json.load(f)
                self.settings = {}
                for item in data.get("settings", []):
                    entry = ReviewGenerationSettings.from_dict(item)
                    self.settings[entry.product_id] = entry
                shutil.copy(backup_path, self.registry_path)
                logger.info("Successfully restored settings from backup")
            except (OSError, KeyError, ValueError, AttributeError) as e:
                logger.error(f"Backup restoration failed: {e}. Starting with empty registry.")
                self.settings = {}
        else:
            logger.warning("No backup file found. Starting with empty settings registry.")
            self.settings = {}

    def get(self, product_id: int) -> Optional[ReviewGenerationSettings]:
        """Get settings for a product, or None."""
        return self.settings.get(product_id)

    def get_or_create(self, product_id: int) -> ReviewGenerationSettings:
        """
        Get settings for a product, creating defaults on first use.

        Newly created settings are kept in memory; call save() to persist.
        """
        entry = self.settings.get(product_id)
        if entry is None:
            entry = ReviewGenerationSettings(product_id=product_id)
            self.settings[product_id] = entry
            logger.info(f"Created default generation settings for product {product_id}")
        return entry

    def update(self, product_id: int, /, **changes) -> ReviewGenerationSettings:
        """
        Update fields of a product's settings.

        The registry is left untouched when the update is rejected.

        Raises:
            ConfigurationError: If a field is unknown or the result is invalid
        """
        existing = self.settings.get(product_id)
        if existing is None:
            current = ReviewGenerationSettings(product_id=product_id).to_dict()
        else:
            current = existing.to_dict()

        unknown = set(changes) - set(current)
        if unknown or "product_id" in changes:
            raise ConfigurationError(f"Cannot update settings fields: {sorted(unknown) or ['product_id']}")

        current.update(changes)
        if "review_distribution" in changes and hasattr(changes["review_distribution"], "to_dict"):
            current["review_distribution"] = changes["review_distribution"].to_dict()
        current["updated_at"] = datetime.now(timezone.utc).isoformat()

        entry = ReviewGenerationSettings.from_dict(current)
        self.settings[product_id] = entry
        logger.info(f"Updated generation settings for product {product_id}: {sorted(changes)}")
        return entry

    def get_all(self) -> List[ReviewGenerationSettings]:
        return list(self.settings.values())

    def save(self) -> None:
        """
        Persist registry to disk with atomic write pattern.
        Creates backup before write.
        """
        self.last_updated = datetime.now(timezone.utc).isoformat()

        # Create backup if registry file exists
        if os.path.exists(self.registry_path):
            backup_path = f"{self.registry_path}.backup"
            shutil.copy(self.registry_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        data = {
            "version": self.version,
            "last_updated": self.last_updated,
            "settings": [entry.to_dict() for entry in self.settings.values()]
        }

        directory = os.path.dirname(self.registry_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        # Atomic write: write to temp file, then rename
        temp_path = f"{self.registry_path}.tmp"
        try:
            with open(temp_path, 'w') as f:
                json.dump(data, f, indent=2)

            os.replace(temp_path, self.registry_path)
            logger.info(f"Settings registry saved: {len(self.settings)} products")

        except Exception as e:
            logger.error(f"Failed to save settings registry: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
