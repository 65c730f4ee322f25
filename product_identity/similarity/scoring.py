"""Similarity scoring for parsed product names."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Union

from rapidfuzz.distance import Levenshtein

from product_identity.parsing import ProductComponents, parse_product_name
from product_identity.similarity.types import ComponentScores, SimilarityResult

logger = logging.getLogger(__name__)

ProductLike = Union[str, ProductComponents]

WEIGHTS = {
    "brand": 0.35,
    "product_type": 0.20,
    "volume": 0.30,
    "package_count": 0.05,
    "tokens": 0.10,
}

# Disclosure and escalation thresholds
STRONG_MATCH = 0.85
SAME_VOLUME = 0.95
SIMILAR_VOLUME = 0.70
TOKEN_OVERLAP_REPORT = 0.70
PARTIAL_TOKEN_DISCOUNT = 0.9

# Score of the last volume step; larger differences are capped at it
VOLUME_TAIL_CAP = 0.75

PRODUCT_TYPE_VARIATIONS = {
    "whiskey": frozenset({"whisky", "bourbon", "scotch"}),
    "beer": frozenset({"ale", "lager", "stout", "ipa"}),
    "wine": frozenset({"red wine", "white wine", "rose"}),
    "vodka": frozenset({"vodka"}),
    "rum": frozenset({"rum"}),
    "gin": frozenset({"gin"}),
    "tequila": frozenset({"tequila", "mezcal"}),
}


def string_similarity(str1: str, str2: str) -> float:
    """Case-insensitive normalized Levenshtein similarity.

    Args:
        str1: First string
        str2: Second string

    Returns:
        1 - distance / max(len), with 1.0 for two empty strings

    """
    if not str1 and not str2:
        return 1.0
    return float(Levenshtein.normalized_similarity(str1.lower(), str2.lower()))


def calculate_token_overlap(
    tokens1: Sequence[str],
    tokens2: Sequence[str],
) -> float:
    """Set overlap rewarding full Jaccard overlap and subset containment.

    Args:
        tokens1: Tokens of the first name
        tokens2: Tokens of the second name

    Returns:
        max(jaccard, containment * 0.9), 0 when either side has no tokens

    """
    if not tokens1 or not tokens2:
        return 0.0

    set1 = {t.lower() for t in tokens1}
    set2 = {t.lower() for t in tokens2}

    intersection = len(set1 & set2)
    union = len(set1 | set2)
    jaccard = intersection / union if union > 0 else 0.0

    min_size = min(len(set1), len(set2))
    containment = intersection / min_size if min_size > 0 else 0.0

    return max(jaccard, containment * PARTIAL_TOKEN_DISCOUNT)


def compare_brands(brand1: str, brand2: str) -> float:
    """Compare two brand strings.

    A missing brand on either side scores 0. A strong single-token match
    (e.g. "Grey Goose" vs "Grey Goose Vodka") scores 90% of the token
    similarity when that beats the full-string similarity.

    Args:
        brand1: First brand
        brand2: Second brand

    Returns:
        Brand similarity in [0, 1]

    """
    if not brand1 or not brand2:
        return 0.0

    normalized1 = brand1.lower().strip()
    normalized2 = brand2.lower().strip()

    if normalized1 == normalized2:
        return 1.0

    similarity = string_similarity(normalized1, normalized2)
    if similarity >= STRONG_MATCH:
        return similarity

    best_token_similarity = 0.0
    for t1 in normalized1.split():
        if len(t1) <= 2:
            continue
        for t2 in normalized2.split():
            if len(t2) <= 2:
                continue
            best_token_similarity = max(best_token_similarity, string_similarity(t1, t2))

    if best_token_similarity >= STRONG_MATCH:
        return max(similarity, best_token_similarity * PARTIAL_TOKEN_DISCOUNT)

    return similarity


def compare_product_types(type1: str, type2: str) -> float:
    """Compare beverage categories; an unknown category is neutral (0.5)."""
    if not type1 or not type2:
        return 0.5

    normalized1 = type1.lower().strip()
    normalized2 = type2.lower().strip()

    if normalized1 == normalized2:
        return 1.0

    for base, variations in PRODUCT_TYPE_VARIATIONS.items():
        if (
            (normalized1 == base and normalized2 in variations)
            or (normalized2 == base and normalized1 in variations)
            or (normalized1 in variations and normalized2 in variations)
        ):
            return 0.9

    return string_similarity(normalized1, normalized2)


def compare_volumes(vol1: float | None, vol2: float | None) -> float:
    """Compare volumes in millilitres by relative difference.

    Args:
        vol1: First volume (None when unknown)
        vol2: Second volume (None when unknown)

    Returns:
        1.0 for equal volumes, a step-down for small labeling noise, 0.5 when
        either side is unknown

    """
    if vol1 is None or vol2 is None:
        return 0.5

    if vol1 == vol2:
        return 1.0

    difference = abs(vol1 - vol2)
    average = (vol1 + vol2) / 2
    percent_difference = difference / average

    if percent_difference < 0.01:
        return 1.0
    if percent_difference < 0.05:
        return 0.98
    if percent_difference < 0.1:
        return 0.90
    if percent_difference < 0.2:
        return VOLUME_TAIL_CAP

    return min(VOLUME_TAIL_CAP, max(0.0, 1 - percent_difference))


def compare_package_counts(count1: int, count2: int) -> float:
    """Compare units per package; single vs multipack is plausible (0.6)."""
    if count1 == count2:
        return 1.0

    if (count1 == 1 and count2 > 1) or (count2 == 1 and count1 > 1):
        return 0.6

    difference = abs(count1 - count2)
    if difference <= 2:
        return 0.8
    if difference <= 4:
        return 0.6

    return 0.3


def _common_tokens(tokens1: Sequence[str], tokens2: Sequence[str]) -> list[str]:
    other = {t.lower() for t in tokens2}
    common: list[str] = []
    for token in tokens1:
        if token.lower() in other and token not in common:
            common.append(token)
    return common


def calculate_component_similarity(
    comp1: ProductComponents,
    comp2: ProductComponents,
) -> SimilarityResult:
    """Canonical scorer - single source of truth for product similarity.

    Args:
        comp1: First parsed product
        comp2: Second parsed product

    Returns:
        SimilarityResult with component scores, confidence and reasoning

    """
    reasoning: list[str] = []

    brand = compare_brands(comp1.brand, comp2.brand)
    if brand >= STRONG_MATCH:
        reasoning.append(
            f'Brand match: "{comp1.brand}" ≈ "{comp2.brand}" ({brand * 100:.0f}%)',
        )

    product_type = compare_product_types(comp1.product_type, comp2.product_type)
    if product_type >= STRONG_MATCH:
        reasoning.append(
            f'Product type match: "{comp1.product_type}" ≈ "{comp2.product_type}" '
            f"({product_type * 100:.0f}%)",
        )

    volume = compare_volumes(comp1.volume_ml, comp2.volume_ml)
    if comp1.volume_ml is not None and comp2.volume_ml is not None:
        if volume >= SAME_VOLUME:
            reasoning.append(f"Same volume: {comp1.volume} = {comp2.volume}")
        elif volume >= SIMILAR_VOLUME:
            reasoning.append(f"Similar volume: {comp1.volume} ≈ {comp2.volume}")

    package_count = compare_package_counts(comp1.package_count, comp2.package_count)
    if comp1.package_count != comp2.package_count and package_count >= 0.6:
        reasoning.append(
            f"Different packaging: {comp1.package_count}pk vs "
            f"{comp2.package_count}pk (may be same product)",
        )

    tokens = calculate_token_overlap(comp1.tokens, comp2.tokens)
    if tokens >= TOKEN_OVERLAP_REPORT:
        common = _common_tokens(comp1.tokens, comp2.tokens)
        if common:
            reasoning.append(f"Common descriptors: {', '.join(common)}")

    overall = min(
        1.0,
        brand * WEIGHTS["brand"]
        + product_type * WEIGHTS["product_type"]
        + volume * WEIGHTS["volume"]
        + package_count * WEIGHTS["package_count"]
        + tokens * WEIGHTS["tokens"],
    )

    confidence = overall

    if brand >= 0.9 and volume >= SAME_VOLUME:
        confidence = max(confidence, 0.92)
        reasoning.append("High confidence: brand and volume closely match")

    if brand >= 0.95 and volume >= SAME_VOLUME and product_type >= STRONG_MATCH:
        confidence = max(confidence, 0.95)
        reasoning.append(
            "Very high confidence: brand, volume, and product type all match",
        )

    if brand >= STRONG_MATCH and product_type >= STRONG_MATCH and volume >= STRONG_MATCH:
        confidence = max(confidence, 0.88)

    if comp1.package_count != comp2.package_count and brand >= 0.9 and volume >= 0.9:
        reasoning.append(
            "Note: Same product with different package counts (e.g., single vs 6-pack)",
        )

    if comp1.normalized_name == comp2.normalized_name:
        confidence = max(confidence, 0.95)
        reasoning.append("Normalized names are identical")

    component_scores: ComponentScores = {
        "brand": brand,
        "product_type": product_type,
        "volume": volume,
        "package_count": package_count,
        "tokens": tokens,
        "overall": overall,
    }

    return SimilarityResult(
        score=overall,
        confidence=confidence,
        component_scores=component_scores,
        reasoning=reasoning,
    )


def _as_components(product: ProductLike) -> ProductComponents:
    if isinstance(product, ProductComponents):
        return product
    return parse_product_name(product)


def compare_products(product1: ProductLike, product2: ProductLike) -> SimilarityResult:
    """Compare two products given as raw names or parsed components."""
    return calculate_component_similarity(
        _as_components(product1), _as_components(product2),
    )
