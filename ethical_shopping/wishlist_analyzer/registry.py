"""Retailer ethics ratings and the category to retailer table."""
from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .categorize import DEFAULT_CATEGORY
from .exceptions import CatalogError
from .models import EthicsRating

DEFAULT_RATING = EthicsRating(score=50, reason="No data", color="#aaaaaa")

DEFAULT_ETHICS_SCORES: Mapping[str, EthicsRating] = MappingProxyType(
    {
        "amazon": EthicsRating(30, "Tax avoidance, labor issues", "#ff4444"),
        "world of books": EthicsRating(85, "Circular economy, B Corp", "#44ff44"),
        "better world books": EthicsRating(90, "Funds literacy programs", "#44ff44"),
        "thriftbooks": EthicsRating(80, "Book reuse", "#44ff44"),
        "waterstones": EthicsRating(60, "UK company", "#ffaa44"),
        "blackwells": EthicsRating(65, "Academic focus", "#ffaa44"),
        "hive": EthicsRating(75, "Supports indie bookshops", "#44ff44"),
        "john lewis": EthicsRating(70, "Employee-owned", "#ffaa44"),
        "currys": EthicsRating(55, "UK company", "#ffaa44"),
        "back market": EthicsRating(85, "Refurbished electronics", "#44ff44"),
        "charity shops": EthicsRating(95, "Funds good causes", "#44ff44"),
        "etsy": EthicsRating(70, "Supports small creators", "#ffaa44"),
        "local shops": EthicsRating(80, "Community support", "#44ff44"),
    }
)

# "Amazon" closes every list as the baseline comparator.
DEFAULT_RETAILERS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "books": (
            "World of Books",
            "Better World Books",
            "ThriftBooks",
            "Hive",
            "Waterstones",
            "Amazon",
        ),
        "electronics": ("Back Market", "John Lewis", "Currys", "Amazon"),
        "toys": ("Local Shops", "John Lewis", "Charity Shops", "Amazon"),
        "garden": ("Local Shops", "Charity Shops", "Amazon"),
        "home": ("Charity Shops", "Local Shops", "John Lewis", "Amazon"),
        "health": ("Local Shops", "John Lewis", "Amazon"),
        "fashion": ("Charity Shops", "Local Shops", "Amazon"),
        "general": ("Charity Shops", "Local Shops", "Etsy", "Amazon"),
    }
)


@dataclass(frozen=True)
class RetailerCatalog:
    """Read-only lookup tables used to rank retailers."""

    ethics: Mapping[str, EthicsRating] = field(default_factory=lambda: DEFAULT_ETHICS_SCORES)
    retailers: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_RETAILERS)

    def rating_for(self, retailer: str) -> EthicsRating:
        return self.ethics.get(retailer.lower(), DEFAULT_RATING)

    def retailers_for(self, category: str) -> tuple[str, ...]:
        if category in self.retailers:
            return self.retailers[category]
        return self.retailers[DEFAULT_CATEGORY]


DEFAULT_CATALOG = RetailerCatalog()


def load_catalog(path: Path | None = None) -> RetailerCatalog:
    """Load catalog overrides from JSON; missing sections keep the defaults."""
    if path is None:
        return DEFAULT_CATALOG
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"failed to read catalog {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError(f"catalog {path} must contain a JSON object")
    ethics = DEFAULT_ETHICS_SCORES
    retailers = DEFAULT_RETAILERS
    if "ethics" in data:
        ethics = MappingProxyType(_parse_ethics(data["ethics"]))
    if "retailers" in data:
        retailers = MappingProxyType(_parse_retailers(data["retailers"]))
    if DEFAULT_CATEGORY not in retailers:
        raise CatalogError(f"catalog {path} has no '{DEFAULT_CATEGORY}' retailer list")
    return RetailerCatalog(ethics=ethics, retailers=retailers)


def _parse_ethics(raw: Any) -> dict[str, EthicsRating]:
    if not isinstance(raw, dict):
        raise CatalogError("'ethics' must map retailer names to ratings")
    ratings: dict[str, EthicsRating] = {}
    for name, entry in raw.items():
        try:
            score = int(entry["score"])
            reason = str(entry.get("reason", DEFAULT_RATING.reason))
            color = str(entry.get("color", DEFAULT_RATING.color))
        except (TypeError, KeyError, ValueError, AttributeError) as exc:
            raise CatalogError(f"invalid ethics entry for {name!r}: {exc}") from exc
        if not 0 <= score <= 100:
            raise CatalogError(f"score for {name!r} must be between 0 and 100")
        ratings[str(name).lower()] = EthicsRating(score=score, reason=reason, color=color)
    return ratings


def _parse_retailers(raw: Any) -> dict[str, tuple[str, ...]]:
    if not isinstance(raw, dict):
        raise CatalogError("'retailers' must map categories to retailer lists")
    table: dict[str, tuple[str, ...]] = {}
    for category, names in raw.items():
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise CatalogError(f"retailers for {category!r} must be a list of names")
        table[str(category)] = tuple(names)
    return table
