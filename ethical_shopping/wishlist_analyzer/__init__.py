"""Wishlist analyzer package."""
from __future__ import annotations

from . import analysis, categorize, extractor, normalize, parser, pipeline, registry, renderer
from .models import AnalysisResult, Item
from .pipeline import AnalysisState, WishlistAnalyzer

__all__ = [
    "analysis",
    "categorize",
    "extractor",
    "normalize",
    "parser",
    "pipeline",
    "registry",
    "renderer",
    "AnalysisResult",
    "AnalysisState",
    "Item",
    "WishlistAnalyzer",
]
