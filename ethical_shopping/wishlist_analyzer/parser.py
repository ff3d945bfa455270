"""Parsing utilities for turning flattened wishlist text into items."""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from .categorize import categorize
from .models import Item
from .normalize import dedupe_items, limit_length

logger = logging.getLogger(__name__)

MIN_LINE_LENGTH = 3
# Standalone titles must be strictly longer than this.
MIN_TITLE_CANDIDATE_LENGTH = 10

TITLED_ENTRY_RE = re.compile(r"^(.+?)\s*\bby\s+(.+?)\s*\(([^)]+)\)")
HEADER_RE = re.compile(r"^(Title|Price|Quantity|Has|Comments)")
PAGINATION_RE = re.compile(r"^\d+\s+of\s+\d+")
# PDF text layers often carry the pound sign as its UTF-8 bytes read as
# Latin-1 ("Â£"); the euro sign degrades to "â‚¬" the same way.
PRICE_RE = re.compile(r"(?:Â£|£|â‚¬|€|\$)\s?(\d+(?:\.\d+)?)")


def match_titled_entry(line: str) -> tuple[str, str, str] | None:
    """Match ``<title> by <author> (<format>)`` at the start of ``line``."""
    match = TITLED_ENTRY_RE.match(line)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip(), match.group(3).strip()


def is_title_candidate(line: str) -> bool:
    if len(line) <= MIN_TITLE_CANDIDATE_LENGTH:
        return False
    if HEADER_RE.match(line):
        return False
    if PAGINATION_RE.match(line):
        return False
    return True


def is_author_line(line: str) -> bool:
    return " by " in f" {line.strip()} "


def match_price(line: str) -> float | None:
    match = PRICE_RE.search(line)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:  # pragma: no cover - regex only admits decimals
        return None


def scan_item(lines: Sequence[str], index: int) -> tuple[Item | None, int]:
    """Read the item starting at ``lines[index]``.

    Returns the item (or ``None`` when the line is noise) together with the
    index the scan should resume from. A standalone title consumes the
    following line when that line looks like author metadata.
    """
    line = lines[index].strip()
    next_index = index + 1
    if len(line) < MIN_LINE_LENGTH:
        return None, next_index

    author: str | None = None
    item_format: str | None = None
    entry = match_titled_entry(line)
    if entry is not None:
        title, author, item_format = entry
        category = categorize(f"{title} {item_format}")
    elif is_title_candidate(line):
        title = line
        if next_index < len(lines) and is_author_line(lines[next_index]):
            next_index += 1
        category = categorize(title)
    else:
        return None, next_index

    title = limit_length(title)
    if not title:
        return None, next_index
    item = Item(
        title=title,
        category=category,
        author=author,
        format=item_format,
        price=match_price(line),
    )
    return item, next_index


def iter_items(lines: Sequence[str]) -> Iterator[Item]:
    index = 0
    while index < len(lines):
        item, index = scan_item(lines, index)
        if item is not None:
            yield item


def parse_wishlist_text(text: str) -> list[Item]:
    lines = text.splitlines()
    items = list(iter_items(lines))
    logger.debug("Parsed %d candidate items from %d lines", len(items), len(lines))
    return items


def extract_items(text: str) -> list[Item]:
    """Parse ``text`` and drop items whose titles repeat."""
    return dedupe_items(parse_wishlist_text(text))
