"""Product identity resolution for distributor depletion data."""

from product_identity.parsing import (
    ProductComponents,
    create_standardized_name,
    parse_product_name,
)
from product_identity.similarity import (
    BestMatch,
    SimilarityResult,
    compare_products,
    find_best_matches,
)

__version__ = "0.1.0"

__all__ = [
    "BestMatch",
    "ProductComponents",
    "SimilarityResult",
    "compare_products",
    "create_standardized_name",
    "find_best_matches",
    "parse_product_name",
]
