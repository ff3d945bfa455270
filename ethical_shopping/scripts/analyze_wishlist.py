#!/usr/bin/env python3
"""CLI entrypoint for the ethical wishlist analyzer."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from ethical_shopping.wishlist_analyzer import registry, renderer
from ethical_shopping.wishlist_analyzer.exceptions import CatalogError
from ethical_shopping.wishlist_analyzer.pipeline import AnalysisState, Phase, WishlistAnalyzer

logger = logging.getLogger("ethical_shopping.wishlist_analyzer.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def parse_backend_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    parts = [entry.strip() for entry in value.split(",") if entry.strip()]
    return parts or None


def build_analyzer(args: argparse.Namespace) -> WishlistAnalyzer:
    catalog_path = Path(args.catalog).expanduser() if args.catalog else None
    try:
        catalog = registry.load_catalog(catalog_path)
    except CatalogError as exc:
        raise SystemExit(str(exc)) from exc
    return WishlistAnalyzer(
        catalog,
        pdf_backends=parse_backend_list(getattr(args, "pdf_backends", None)),
    )


def command_upload(args: argparse.Namespace) -> AnalysisState:
    # Type is checked before the file is read, so a missing file surfaces as a read error.
    path = Path(args.pdf).expanduser()
    logger.info("Analysing %s", path)
    return build_analyzer(args).analyze_pdf(path)


def command_search(args: argparse.Namespace) -> AnalysisState:
    return build_analyzer(args).search(args.term)


def command_url(args: argparse.Namespace) -> AnalysisState:
    return build_analyzer(args).analyze_url(args.url)


def report(state: AnalysisState, args: argparse.Namespace) -> int:
    if state.phase is not Phase.READY or state.result is None:
        print(state.notice or "Nothing to report.")
        return 1
    output_path = Path(args.output).expanduser() if args.output else None
    print(renderer.render_summary(state.result, output_path))
    if output_path is not None:
        logger.info("Summary written to %s", output_path)
    if args.json:
        json_path = Path(args.json).expanduser()
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with json_path.open("w", encoding="utf-8") as fh:
            json.dump(state.result.to_dict(), fh, indent=2, ensure_ascii=False)
        logger.info("Result JSON written to %s", json_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(
        description="Find more ethical retailers for the items on a wishlist"
    )
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser_obj.add_argument(
        "--catalog", help="JSON file overriding the ethics scores and retailer lists"
    )
    parser_obj.add_argument("--output", help="Write the Markdown summary to this path")
    parser_obj.add_argument("--json", help="Write the analysis result as JSON to this path")
    subparsers = parser_obj.add_subparsers(dest="command")

    upload_parser = subparsers.add_parser("upload", help="Analyse a wishlist printed to PDF")
    upload_parser.add_argument("pdf", help="Path to the wishlist PDF")
    upload_parser.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides WISHLIST_PDF_BACKENDS)",
    )
    upload_parser.set_defaults(func=command_upload)

    search_parser = subparsers.add_parser("search", help="Quick search for ethical retailers")
    search_parser.add_argument("term", help="What you are looking for, e.g. 'books'")
    search_parser.set_defaults(func=command_search)

    url_parser = subparsers.add_parser("url", help="Analyse a public wishlist URL")
    url_parser.add_argument("url", help="Wishlist URL")
    url_parser.set_defaults(func=command_url)

    return parser_obj


def main(argv: list[str] | None = None) -> int:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return 0
    configure_logging(args.verbose)
    state = args.func(args)
    return report(state, args)


if __name__ == "__main__":
    raise SystemExit(main())
