"""Keyword categorisation of wishlist items."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_CATEGORY = "general"


@dataclass(frozen=True)
class CategoryRule:
    category: str
    keywords: frozenset[str]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


def _rule(category: str, keywords: Iterable[str]) -> CategoryRule:
    return CategoryRule(category, frozenset(keyword.lower() for keyword in keywords))


# Evaluated in order; the first rule with a matching keyword wins.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    _rule(
        "books",
        [
            "book",
            "novel",
            "paperback",
            "hardcover",
            "kindle",
            "author",
            "read",
            "story",
            "tales",
            "guide",
        ],
    ),
    _rule(
        "electronics",
        [
            "electronic",
            "phone",
            "cable",
            "charger",
            "usb",
            "computer",
            "laptop",
            "tablet",
            "camera",
            "headphone",
        ],
    ),
    _rule(
        "toys",
        ["toy", "game", "puzzle", "play", "child", "kid", "lego", "board game"],
    ),
    _rule(
        "garden",
        ["garden", "plant", "seed", "outdoor", "flower", "lawn", "soil"],
    ),
    _rule(
        "home",
        ["kitchen", "home", "decor", "furniture", "lamp", "cushion", "table"],
    ),
    _rule(
        "health",
        ["beauty", "health", "care", "cosmetic", "skincare", "vitamin", "wellness"],
    ),
    _rule(
        "fashion",
        ["clothing", "shirt", "dress", "shoes", "jacket", "fashion", "wear"],
    ),
)

CATEGORIES: tuple[str, ...] = tuple(rule.category for rule in CATEGORY_RULES) + (
    DEFAULT_CATEGORY,
)


# Quick search only recognises a few broad terms.
SEARCH_RULES: tuple[CategoryRule, ...] = (
    _rule("books", ["book"]),
    _rule("electronics", ["electronic", "phone"]),
    _rule("toys", ["toy", "game"]),
)


def categorize_search_term(term: str) -> str:
    return categorize(term, SEARCH_RULES)


def categorize(text: str, rules: Iterable[CategoryRule] = CATEGORY_RULES) -> str:
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.category
    return DEFAULT_CATEGORY
