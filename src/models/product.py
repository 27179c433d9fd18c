"""
Product data model.

Minimal view of a storefront digital product, enough to generate reviews for it.
"""

from dataclasses import dataclass
from typing import Optional

import config.settings as settings


@dataclass
class Product:
    id: int
    name: str
    category: str = settings.DEFAULT_CATEGORY
    is_active: bool = True
    platform_id: Optional[int] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError(f"Product {self.id} must have a name")
        if not self.category:
            self.category = settings.DEFAULT_CATEGORY

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            category=data.get("category") or settings.DEFAULT_CATEGORY,
            is_active=data.get("is_active", True),
            platform_id=data.get("platform_id")
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "is_active": self.is_active,
            "platform_id": self.platform_id
        }
