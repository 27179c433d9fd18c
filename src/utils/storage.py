"""
Storage utility.

File I/O helpers for generated reviews and the product catalog.
"""

import json
import os
import logging
from typing import Dict, List

from src.errors import PersistenceError
from src.models.product import Product
from src.models.review import GeneratedReview

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for all data persistence except generation settings.

    Handles:
    - Stored reviews (data/reviews/<product_id>.json)
    - Product catalog (data/products.json)
    - Pending review schedule (data/schedule.json)
    """

    def __init__(self, data_root: str):
        """
        Initialize storage manager.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = data_root
        self.reviews_dir = os.path.join(data_root, "reviews")
        self.products_path = os.path.join(data_root, "products.json")
        self.schedule_path = os.path.join(data_root, "schedule.json")

        # Create directories if they don't exist
        os.makedirs(self.reviews_dir, exist_ok=True)

        logger.info(f"Initialized StorageManager with data_root={data_root}")

    def insert_review(self, product_id: int, review: GeneratedReview, source: str = "auto") -> Dict:
        """
        Append a review to the product's review file.

        Args:
            product_id: Product the review belongs to
            review: Generated review
            source: Origin marker ("auto" for generated reviews, "user" otherwise)

        Returns:
            Stored review dict, including its assigned id

        Raises:
            PersistenceError: If the review file cannot be read or written
        """
        filepath = self._reviews_path(product_id)

        try:
            reviews = self._read_json_list(filepath)
            record = review.to_dict()
            record["product_id"] = product_id
            record["source"] = source
            record["id"] = max((r.get("id", 0) for r in reviews), default=0) + 1
            reviews.append(record)

            with open(filepath, 'w') as f:
                json.dump(reviews, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to store review for product {product_id}: {e}")
            raise PersistenceError(f"Failed to store review for product {product_id}: {e}", product_id)

        logger.debug(f"Stored review {record['id']} for product {product_id} in {filepath}")
        return record

    def load_reviews(self, product_id: int) -> List[Dict]:
        """
        Load stored reviews for a product.

        Returns:
            List of review dicts, empty if the product has none
        """
        filepath = self._reviews_path(product_id)

        if not os.path.exists(filepath):
            logger.debug(f"No reviews stored for product {product_id}")
            return []

        try:
            reviews = self._read_json_list(filepath)
            logger.debug(f"Loaded {len(reviews)} reviews from {filepath}")
            return reviews
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load reviews for product {product_id}: {e}")
            return []

    def get_all_review_product_ids(self) -> List[int]:
        """
        Get all product ids that have a review file.

        Returns:
            Sorted list of product ids
        """
        product_ids = []
        for filename in os.listdir(self.reviews_dir):
            if filename.endswith('.json'):
                stem = filename.replace('.json', '')
                if stem.isdigit():
                    product_ids.append(int(stem))

        return sorted(product_ids)

    def load_products(self) -> List[Product]:
        """
        Load the product catalog.

        Returns:
            List of products, empty if no catalog exists
        """
        if not os.path.exists(self.products_path):
            logger.warning(f"No product catalog found at {self.products_path}")
            return []

        try:
            with open(self.products_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load product catalog: {e}")
            return []

        products = []
        for item in data:
            try:
                products.append(Product.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid product entry {item!r}: {e}")

        return products

    def get_product(self, product_id: int):
        """Look up a catalog product by id, or None."""
        for product in self.load_products():
            if product.id == product_id:
                return product
        return None

    def save_products(self, products: List[Product]) -> None:
        """Overwrite the product catalog."""
        try:
            with open(self.products_path, 'w') as f:
                json.dump([p.to_dict() for p in products], f, indent=2)
            logger.info(f"Saved {len(products)} products to {self.products_path}")
        except Exception as e:
            logger.error(f"Failed to save product catalog: {e}")
            raise

    def save_schedule(self, entries: List[Dict]) -> None:
        """
        Save pending scheduled reviews.

        Args:
            entries: Serialized ScheduledReview dicts
        """
        try:
            with open(self.schedule_path, 'w') as f:
                json.dump(entries, f, indent=2)
            logger.info(f"Saved {len(entries)} scheduled reviews to {self.schedule_path}")
        except Exception as e:
            logger.error(f"Failed to save review schedule: {e}")
            raise

    def load_schedule(self) -> List[Dict]:
        """
        Load pending scheduled reviews.

        Returns:
            Serialized ScheduledReview dicts, empty if no schedule exists
        """
        if not os.path.exists(self.schedule_path):
            logger.debug(f"No review schedule found at {self.schedule_path}")
            return []

        try:
            return self._read_json_list(self.schedule_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load review schedule: {e}")
            return []

    def _reviews_path(self, product_id: int) -> str:
        return os.path.join(self.reviews_dir, f"{product_id}.json")

    @staticmethod
    def _read_json_list(filepath: str) -> List[Dict]:
        if not os.path.exists(filepath):
            return []
        with open(filepath, 'r') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list in {filepath}")
        if not all(isinstance(item, dict) for item in data):
            raise ValueError(f"Expected a JSON list of objects in {filepath}")
        return data
