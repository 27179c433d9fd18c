"""
Review Statistics.

Per-product rating summary (total, average, per-star counts) and
a multi-product stats table exported to CSV.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, List

import pandas as pd

from src.utils.storage import StorageManager

logger = logging.getLogger(__name__)

STAR_COLUMNS = ['1★', '2★', '3★', '4★', '5★']


class ReviewStatsAggregator:
    """
    Aggregates stored reviews into rating statistics.
    """

    def __init__(self, storage: StorageManager):
        self.storage = storage

    def summarize(self, product_id: int) -> Dict:
        """
        Summarize stored reviews for one product.

        Returns:
            Dict with total_reviews, average_rating, rating_counts (5..1),
            verified_share and auto_share
        """
        df = self._reviews_frame(product_id)

        if df.empty:
            return {
                "product_id": product_id,
                "total_reviews": 0,
                "average_rating": 0.0,
                "rating_counts": {rating: 0 for rating in range(5, 0, -1)},
                "verified_share": 0.0,
                "auto_share": 0.0
            }

        counts = df['rating'].value_counts()

        return {
            "product_id": product_id,
            "total_reviews": int(len(df)),
            "average_rating": round(float(df['rating'].mean()), 2),
            "rating_counts": {rating: int(counts.get(rating, 0)) for rating in range(5, 0, -1)},
            "verified_share": round(float(df['verified_purchase'].mean()), 4),
            "auto_share": round(float((df['source'] == 'auto').mean()), 4)
        }

    def generate_report(self, product_ids: List[int], output_dir: str = "output") -> str:
        """
        Build the stats table for several products and save it as CSV.

        Args:
            product_ids: Products to include
            output_dir: Directory to save CSV output

        Returns:
            Path to generated CSV file
        """
        logger.info(f"Generating review stats for {len(product_ids)} products")

        rows = []
        for product_id in product_ids:
            summary = self.summarize(product_id)
            row = {
                'product_id': product_id,
                'total_reviews': summary['total_reviews'],
                'average_rating': summary['average_rating']
            }
            for rating in range(1, 6):
                row[f'{rating}★'] = summary['rating_counts'][rating]
            row['verified_share'] = summary['verified_share']
            rows.append(row)

        df = pd.DataFrame(rows)

        if df.empty:
            logger.warning("No products given, creating empty stats table")
            df = pd.DataFrame(columns=['product_id', 'total_reviews', 'average_rating'] + STAR_COLUMNS + ['verified_share'])
        else:
            df = df.sort_values('total_reviews', ascending=False)

        report_date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"review_stats_{report_date}.csv")
        df.to_csv(output_path, index=False)

        logger.info(f"Review stats saved to {output_path} ({len(df)} products)")

        metadata_path = os.path.join(output_dir, f"review_stats_{report_date}_metadata.json")
        metadata = {
            "report_date": report_date,
            "product_ids": list(product_ids),
            "total_reviews": int(df['total_reviews'].sum()) if not df.empty else 0,
            "products_without_reviews": [
                int(pid) for pid in df.loc[df['total_reviews'] == 0, 'product_id']
            ] if not df.empty else [],
            "generated_at": datetime.now(timezone.utc).isoformat()
        }

        with open(metadata_path, 'w') as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Metadata saved to {metadata_path}")

        return output_path

    def _reviews_frame(self, product_id: int) -> pd.DataFrame:
        reviews = self.storage.load_reviews(product_id)
        df = pd.DataFrame(reviews, columns=['rating', 'verified_purchase', 'source'])
        if not df.empty:
            df['rating'] = df['rating'].astype(int)
            df['verified_purchase'] = df['verified_purchase'].fillna(False).astype(bool)
        return df
