from __future__ import annotations

import pytest

from ethical_shopping.wishlist_analyzer import parser
from ethical_shopping.wishlist_analyzer.parser import (
    extract_items,
    match_price,
    parse_wishlist_text,
    scan_item,
)


def test_titled_entry_populates_author_and_format() -> None:
    items = parse_wishlist_text("The Hobbit by J.R.R. Tolkien (Paperback)")
    assert len(items) == 1
    item = items[0]
    assert item.title == "The Hobbit"
    assert item.author == "J.R.R. Tolkien"
    assert item.format == "Paperback"
    assert item.category == "books"
    assert item.price is None


def test_titled_entry_needs_by_as_a_word() -> None:
    entry = parser.match_titled_entry("Baby Monitor by Philips (Electronics)")
    assert entry == ("Baby Monitor", "Philips", "Electronics")
    items = parse_wishlist_text("Baby Monitor by Philips (Electronics)")
    assert items[0].category == "electronics"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("The Hobbit by J.R.R. Tolkien (Paperback) Â£12.99 1 0", 12.99),
        ("Stainless Steel Water Bottle £7.50", 7.5),
        ("Desk Organiser Tray $24", 24.0),
        ("Linen Tea Towel Set â‚¬9.95", 9.95),
    ],
)
def test_price_is_read_from_currency_token(line: str, expected: float) -> None:
    assert match_price(line) == pytest.approx(expected)
    items = parse_wishlist_text(line)
    assert items[0].price == pytest.approx(expected)


def test_line_without_currency_has_no_price() -> None:
    items = parse_wishlist_text("Ceramic Plant Pot Large 12.99")
    assert items[0].price is None


def test_standalone_title_consumes_author_line() -> None:
    lines = ["Wireless Mouse", "by Logitech", "next unrelated line"]
    item, next_index = scan_item(lines, 0)
    assert item is not None
    assert item.title == "Wireless Mouse"
    assert item.author is None
    assert item.category == "general"
    assert next_index == 2

    titles = [entry.title for entry in parse_wishlist_text("\n".join(lines))]
    assert titles.count("Wireless Mouse") == 1
    assert "by Logitech" not in titles
    assert titles == ["Wireless Mouse", "next unrelated line"]


def test_author_line_with_embedded_by_is_consumed() -> None:
    text = "Cast Iron Skillet 26cm\nSold by Kitchen Co Ltd\nCotton Cushion Cover"
    titles = [item.title for item in parse_wishlist_text(text)]
    assert titles == ["Cast Iron Skillet 26cm", "Cotton Cushion Cover"]


def test_headers_and_pagination_yield_nothing() -> None:
    text = "Title Price Quantity Has Comments\n1 of 3\n\nPrice\n12 of 30 items shown\n"
    assert parse_wishlist_text(text) == []


def test_noise_lines_are_skipped() -> None:
    item, next_index = scan_item(["  ", "x"], 0)
    assert item is None
    assert next_index == 1
    assert parse_wishlist_text("ab\nshort line\n") == []


def test_long_line_title_is_bounded() -> None:
    line = "Deluxe " + "x" * 493
    assert len(line) == 500
    items = parse_wishlist_text(line)
    assert len(items) == 1
    assert len(items[0].title) <= 150
    assert items[0].title == line[:150]


def test_extract_items_dedupes_titles() -> None:
    text = "\n".join(
        [
            "The Hobbit by J.R.R. Tolkien (Paperback)",
            "Reusable Coffee Cup 350ml",
            "THE HOBBIT by J.R.R. Tolkien (Hardcover)",
        ]
    )
    items = extract_items(text)
    assert [item.title for item in items] == ["The Hobbit", "Reusable Coffee Cup 350ml"]
    assert items[0].format == "Paperback"


def test_titles_spanning_pages_keep_order() -> None:
    page_one = "Title Price Quantity Has Comments\nWooden Train Set Junior"
    page_two = "by Brio\n2 of 2\nYoga Mat Non Slip Purple"
    items = extract_items(f"{page_one}\n{page_two}\n")
    assert [item.title for item in items] == [
        "Wooden Train Set Junior",
        "Yoga Mat Non Slip Purple",
    ]
