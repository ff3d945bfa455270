"""Rendering utilities for analysis results."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from .models import AnalysisResult, Item, RetailerRecommendation


def render_summary(result: AnalysisResult, output_path: Path | None = None) -> str:
    now = datetime.now(UTC).replace(microsecond=0).isoformat()
    if result.type == "search":
        lines = [f"# Ethical Retailers for \"{result.search_term}\"", "", f"_Generated: {now}_", ""]
    else:
        lines = ["# Wishlist Analysis", "", f"_Generated: {now}_", ""]
        lines.append(f"**Total items:** {result.total_item_count}")
        lines.append(f"**Categories:** {result.category_count}")
        lines.append("")
    for category, summary in result.per_category.items():
        lines.append(f"## {category.title()} ({summary.item_count})")
        lines.append("")
        lines.append("| Retailer | Score | Why |")
        lines.append("| --- | --- | --- |")
        for retailer in summary.retailers:
            lines.append(format_retailer_row(retailer))
        if summary.sample_items:
            lines.append("")
            examples = ", ".join(escape_cell(item.title) for item in summary.sample_items)
            lines.append(f"Examples: {examples}")
        lines.append("")
    if result.preview_items:
        lines.append("## Extracted Items")
        lines.append("")
        lines.extend(format_item_lines(result.preview_items))
        lines.append("")
    content = "\n".join(lines)
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    return content


def format_retailer_row(retailer: RetailerRecommendation) -> str:
    return f"| {escape_cell(retailer.name)} | {retailer.score}/100 | {escape_cell(retailer.reason)} |"


def format_item_lines(items: Iterable[Item]) -> list[str]:
    results = []
    for item in items:
        line = f"- {item.title}"
        if item.author:
            line += f" by {item.author}"
        if item.format:
            line += f" ({item.format})"
        if item.price is not None:
            line += f" - £{item.price:.2f}"
        results.append(f"{line} [{item.category}]")
    return results


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")
