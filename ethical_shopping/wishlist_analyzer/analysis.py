"""Grouping of parsed items and retailer recommendations per category."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType

from .categorize import categorize_search_term
from .models import (
    AnalysisResult,
    CategoryBucket,
    CategorySummary,
    Item,
    RetailerRecommendation,
)
from .registry import DEFAULT_CATALOG, RetailerCatalog

logger = logging.getLogger(__name__)

SAMPLE_ITEM_LIMIT = 3
PREVIEW_ITEM_LIMIT = 10


def group_by_category(items: Iterable[Item]) -> dict[str, CategoryBucket]:
    buckets: dict[str, CategoryBucket] = {}
    for item in items:
        buckets.setdefault(item.category, CategoryBucket()).add(item)
    return buckets


def retailers_for_category(
    category: str, catalog: RetailerCatalog = DEFAULT_CATALOG
) -> tuple[str, ...]:
    return catalog.retailers_for(category)


def recommend_retailers(
    category: str, catalog: RetailerCatalog = DEFAULT_CATALOG
) -> tuple[RetailerRecommendation, ...]:
    """Score the category's retailers, best first; ties keep table order."""
    recommendations = []
    for name in retailers_for_category(category, catalog):
        rating = catalog.rating_for(name)
        recommendations.append(
            RetailerRecommendation(
                name=name, score=rating.score, reason=rating.reason, color=rating.color
            )
        )
    return tuple(sorted(recommendations, key=lambda entry: entry.score, reverse=True))


def aggregate(
    items: Sequence[Item], catalog: RetailerCatalog = DEFAULT_CATALOG
) -> AnalysisResult:
    buckets = group_by_category(items)
    per_category = {
        category: CategorySummary(
            retailers=recommend_retailers(category, catalog),
            item_count=bucket.count,
            sample_items=tuple(bucket.items[:SAMPLE_ITEM_LIMIT]),
        )
        for category, bucket in buckets.items()
    }
    logger.debug("Aggregated %d items into %d categories", len(items), len(per_category))
    return AnalysisResult(
        type="wishlist",
        per_category=MappingProxyType(per_category),
        total_item_count=len(items),
        category_count=len(buckets),
        preview_items=tuple(items[:PREVIEW_ITEM_LIMIT]),
    )


def quick_search(term: str, catalog: RetailerCatalog = DEFAULT_CATALOG) -> AnalysisResult:
    """Recommend retailers for a free-text search without any wishlist."""
    category = categorize_search_term(term)
    summary = CategorySummary(retailers=recommend_retailers(category, catalog), item_count=1)
    return AnalysisResult(
        type="search",
        per_category=MappingProxyType({category: summary}),
        total_item_count=1,
        category_count=1,
        search_term=term,
    )
