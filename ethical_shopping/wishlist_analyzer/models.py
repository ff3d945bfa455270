"""Records produced by the wishlist analysis pipeline."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Item:
    """A product candidate parsed from wishlist text."""

    title: str
    category: str
    author: str | None = None
    format: str | None = None
    price: float | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"title": self.title, "category": self.category}
        for key in ("author", "format", "price"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class CategoryBucket:
    """Items sharing one category, in first-seen order."""

    items: list[Item] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def add(self, item: Item) -> None:
        self.items.append(item)


@dataclass(frozen=True)
class EthicsRating:
    score: int
    reason: str
    color: str


@dataclass(frozen=True)
class RetailerRecommendation:
    name: str
    score: int
    reason: str
    color: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class CategorySummary:
    retailers: tuple[RetailerRecommendation, ...]
    item_count: int
    sample_items: tuple[Item, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "retailers": [retailer.to_dict() for retailer in self.retailers],
            "item_count": self.item_count,
            "sample_items": [item.to_dict() for item in self.sample_items],
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one wishlist upload or quick search."""

    type: str
    per_category: Mapping[str, CategorySummary]
    total_item_count: int
    category_count: int
    preview_items: tuple[Item, ...] = ()
    search_term: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "per_category": {
                category: summary.to_dict()
                for category, summary in self.per_category.items()
            },
            "total_item_count": self.total_item_count,
            "category_count": self.category_count,
            "preview_items": [item.to_dict() for item in self.preview_items],
        }
        if self.search_term is not None:
            data["search_term"] = self.search_term
        return data
