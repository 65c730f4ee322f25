"""Similarity module for product identity resolution.

This module provides product similarity scoring, ranking against known
canonical names and catalog duplicate scanning.
"""

from .duplicate_scan import scan_for_duplicates
from .matching import analyze_product_duplicates, find_best_matches
from .scoring import (
    calculate_component_similarity,
    calculate_token_overlap,
    compare_brands,
    compare_package_counts,
    compare_product_types,
    compare_products,
    compare_volumes,
    string_similarity,
)
from .types import (
    BestMatch,
    ComponentScores,
    DuplicateAnalysis,
    ProductMatch,
    ScanSummary,
    SimilarityResult,
)

__all__ = [
    "BestMatch",
    "ComponentScores",
    "DuplicateAnalysis",
    "ProductMatch",
    "ScanSummary",
    "SimilarityResult",
    "analyze_product_duplicates",
    "calculate_component_similarity",
    "calculate_token_overlap",
    "compare_brands",
    "compare_package_counts",
    "compare_product_types",
    "compare_products",
    "compare_volumes",
    "find_best_matches",
    "scan_for_duplicates",
    "string_similarity",
]
