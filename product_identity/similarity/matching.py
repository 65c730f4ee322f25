"""Ranking of a product name against known canonical names."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from product_identity.parsing import (
    create_standardized_name,
    normalize_product_name,
    parse_product_name,
)
from product_identity.similarity.scoring import (
    calculate_component_similarity,
    compare_brands,
    compare_products,
)
from product_identity.similarity.types import (
    BestMatch,
    DuplicateAnalysis,
    ProductMatch,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.70
DEFAULT_MAX_RESULTS = 5
DEFAULT_AUTO_MERGE_THRESHOLD = 0.90
DEFAULT_REVIEW_MAX_MATCHES = 3

# Confidence assigned to an identical normalized name
EXACT_NORMALIZED_CONFIDENCE = 0.95

# Below this brand similarity a candidate is skipped without full scoring
BRAND_PRUNE_THRESHOLD = 0.5


def find_best_matches(
    new_product: str,
    existing_products: Sequence[str],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[BestMatch]:
    """Rank known product names by how likely they denote new_product.

    Candidates whose brand clearly differs are pruned before full scoring.
    Ties in confidence keep the candidate order of existing_products.

    Args:
        new_product: Newly observed product name
        existing_products: Known canonical product names
        min_confidence: Confidence floor for a candidate to be returned
        max_results: Maximum number of matches returned

    Returns:
        Matches sorted by confidence, highest first

    """
    if not existing_products:
        return []

    new_comp = parse_product_name(new_product)
    matches: list[BestMatch] = []
    pruned = 0

    for existing_product in existing_products:
        existing_comp = parse_product_name(existing_product)

        if (
            new_comp.brand
            and existing_comp.brand
            and compare_brands(new_comp.brand, existing_comp.brand) < BRAND_PRUNE_THRESHOLD
        ):
            pruned += 1
            continue

        similarity = calculate_component_similarity(new_comp, existing_comp)
        if similarity.confidence >= min_confidence:
            matches.append(BestMatch(candidate=existing_product, similarity=similarity))

    logger.debug(
        f"find_best_matches('{new_product}'): {len(existing_products)} candidates, "
        f"{pruned} pruned by brand, {len(matches)} above {min_confidence}",
    )

    matches.sort(key=lambda m: m.similarity.confidence, reverse=True)
    return matches[:max_results]


def _reasoning_text(reasoning: list[str], score: float) -> str:
    if reasoning:
        return "; ".join(reasoning)
    return f"Component match score: {score * 100:.0f}%"


def analyze_product_duplicates(
    new_products: Sequence[str],
    existing_products: Sequence[str],
    auto_merge_threshold: float = DEFAULT_AUTO_MERGE_THRESHOLD,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    max_matches: int = DEFAULT_REVIEW_MAX_MATCHES,
) -> list[DuplicateAnalysis]:
    """Decide for each new product name whether it duplicates a known one.

    The caller supplies the auto-merge threshold; a top match at or above it
    is flagged for automatic merging, any other match for review, and a name
    without matches is a new product.

    Args:
        new_products: Newly observed product names
        existing_products: Known canonical product names
        auto_merge_threshold: Confidence at which a match merges without review
        min_confidence: Confidence floor for reporting a match
        max_matches: Maximum matches kept per new product

    Returns:
        One DuplicateAnalysis per new product, in input order

    """
    if not existing_products:
        return [
            DuplicateAnalysis(
                product_name=name,
                matches=[],
                should_auto_merge=False,
                suggested_canonical_name=name,
            )
            for name in new_products
        ]

    existing = [(name, normalize_product_name(name)) for name in existing_products]
    results: list[DuplicateAnalysis] = []

    for new_product in new_products:
        new_comp = parse_product_name(new_product)
        matches: list[ProductMatch] = []

        for existing_name, existing_normalized in existing:
            if new_comp.normalized_name == existing_normalized:
                matches.append(
                    ProductMatch(
                        existing_product_name=existing_name,
                        confidence=EXACT_NORMALIZED_CONFIDENCE,
                        reasoning="Exact match after normalization",
                    ),
                )
                continue

            similarity = compare_products(new_comp, existing_name)
            if similarity.confidence >= min_confidence:
                matches.append(
                    ProductMatch(
                        existing_product_name=existing_name,
                        confidence=similarity.confidence,
                        reasoning=_reasoning_text(similarity.reasoning, similarity.score),
                    ),
                )

        matches.sort(key=lambda m: m.confidence, reverse=True)
        top_matches = matches[:max_matches]

        highest_confidence = top_matches[0].confidence if top_matches else 0.0

        if top_matches:
            suggested = top_matches[0].existing_product_name
        else:
            suggested = create_standardized_name(new_comp) or new_product

        results.append(
            DuplicateAnalysis(
                product_name=new_product,
                matches=top_matches,
                should_auto_merge=highest_confidence >= auto_merge_threshold,
                suggested_canonical_name=suggested,
            ),
        )

    auto_merge = sum(1 for r in results if r.decision == "auto_merge")
    review = sum(1 for r in results if r.decision == "review")
    logger.info(
        f"Duplicate analysis: {len(results)} products, {auto_merge} auto-merge, "
        f"{review} need review, {len(results) - auto_merge - review} new",
    )

    return results
