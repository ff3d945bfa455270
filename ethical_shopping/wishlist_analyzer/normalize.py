"""Normalization helpers."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import Item

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 150


def limit_length(value: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    return value[:max_length]


def title_key(title: str) -> str:
    return title.lower()


def dedupe_items(items: Iterable[Item]) -> list[Item]:
    seen: set[str] = set()
    result: list[Item] = []
    for item in items:
        key = title_key(item.title)
        if key in seen:
            logger.debug("Dropping duplicate item %r", item.title)
            continue
        seen.add(key)
        result.append(item)
    return result
