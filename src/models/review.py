"""
Review data model.

Represents a synthetic review produced by the generation pipeline.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from src.models.content import sentiment_for_rating


@dataclass(frozen=True)
class GeneratedReview:
    """
    A generated review, handed once to the review store and never mutated.
    """
    product_id: int
    rating: int  # 1-5 star rating
    title: str
    content: str
    pros: Tuple[str, ...] = ()
    cons: Tuple[str, ...] = ()
    verified_purchase: bool = False
    country_code: str = ""  # ISO alpha-2
    device_type: str = ""  # mobile, desktop, tablet
    platform: str = ""  # browser name
    created_at: Optional[datetime] = None
    author_name: Optional[str] = None
    source: str = "auto"
    status: str = "published"

    def __post_init__(self):
        # Validate rating
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

        object.__setattr__(self, "pros", tuple(self.pros))
        object.__setattr__(self, "cons", tuple(self.cons))

    @property
    def sentiment(self) -> str:
        return sentiment_for_rating(self.rating)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "product_id": self.product_id,
            "rating": self.rating,
            "title": self.title,
            "content": self.content,
            "pros": list(self.pros),
            "cons": list(self.cons),
            "verified_purchase": self.verified_purchase,
            "country_code": self.country_code,
            "device_type": self.device_type,
            "platform": self.platform,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "author_name": self.author_name,
            "source": self.source,
            "status": self.status
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedReview":
        """Create GeneratedReview from JSON dict."""
        created_at = data.get("created_at")
        return cls(
            product_id=data["product_id"],
            rating=data["rating"],
            title=data["title"],
            content=data["content"],
            pros=data.get("pros", ()),
            cons=data.get("cons", ()),
            verified_purchase=data.get("verified_purchase", False),
            country_code=data.get("country_code", ""),
            device_type=data.get("device_type", ""),
            platform=data.get("platform", ""),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            author_name=data.get("author_name"),
            source=data.get("source", "auto"),
            status=data.get("status", "published")
        )
