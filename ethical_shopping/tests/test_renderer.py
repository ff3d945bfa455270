from __future__ import annotations

from pathlib import Path

from ethical_shopping.wishlist_analyzer import renderer
from ethical_shopping.wishlist_analyzer.analysis import aggregate
from ethical_shopping.wishlist_analyzer.models import Item


def test_render_wishlist_summary(tmp_path: Path) -> None:
    items = [
        Item(
            title="The Hobbit",
            category="books",
            author="J.R.R. Tolkien",
            format="Paperback",
            price=12.99,
        ),
        Item(title="Tea | Coffee Tray", category="home"),
    ]
    output_path = tmp_path / "index" / "SUMMARY.md"
    content = renderer.render_summary(aggregate(items), output_path)
    assert "**Total items:** 2" in content
    assert "## Books (1)" in content
    assert "| Better World Books | 90/100 | Funds literacy programs |" in content
    assert "- The Hobbit by J.R.R. Tolkien (Paperback) - £12.99 [books]" in content
    assert "Examples: Tea \\| Coffee Tray" in content
    assert output_path.read_text(encoding="utf-8") == content
