#!/usr/bin/env python3
"""Score Pair CLI - Debug utility to trace similarity scoring for two product names.

Usage:
    python scripts/score_pair.py "Avua Cachaca Prata- 750mL" "AVUA PRATA CACHACA 6PK 750M"
    python scripts/score_pair.py "Grey Goose Vodka 750mL" "Grey Goose Vodka 1.75L" --auto-merge 0.92
"""

import argparse
import sys
from pathlib import Path
from typing import Any

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from product_identity.parsing import (  # noqa: E402
    ProductComponents,
    create_standardized_name,
    extract_brand_with_source,
    parse_product_name,
)
from product_identity.similarity.scoring import (  # noqa: E402
    WEIGHTS,
    calculate_component_similarity,
)
from product_identity.utils.io_utils import load_settings  # noqa: E402
from product_identity.utils.path_utils import get_config_path  # noqa: E402


def _print_components(label: str, comp: ProductComponents) -> None:
    _, brand_source = extract_brand_with_source(comp.original_name, list(comp.tokens))
    print(f"   {label}: '{comp.original_name}'")
    print(f"      brand: '{comp.brand}' (via {brand_source})")
    print(f"      product type: '{comp.product_type}'")
    print(f"      volume: '{comp.volume}' ({comp.volume_ml} mL)")
    print(f"      package count: {comp.package_count}")
    print(f"      tokens: {list(comp.tokens)}")
    print(f"      descriptors: {list(comp.descriptors)}")
    print(f"      normalized: '{comp.normalized_name}'")
    print(f"      standardized: '{create_standardized_name(comp)}'")


def trace_scoring(
    name_a: str,
    name_b: str,
    settings: dict[str, Any],
) -> float:
    """Trace the complete scoring process for two names."""
    print("=" * 80)
    print("PRODUCT SIMILARITY TRACE")
    print("=" * 80)

    comp_a = parse_product_name(name_a)
    comp_b = parse_product_name(name_b)

    print("\n1. PARSED COMPONENTS:")
    _print_components("A", comp_a)
    _print_components("B", comp_b)

    result = calculate_component_similarity(comp_a, comp_b)
    scores = result.component_scores

    print("\n2. COMPONENT SCORES:")
    for component, weight in WEIGHTS.items():
        value = scores[component]  # type: ignore[literal-required]
        print(f"   {component:<14} {value:.3f} x {weight:.2f} = {value * weight:.3f}")
    print(f"   {'overall':<14} {scores['overall']:.3f}")

    print("\n3. CONFIDENCE:")
    print(f"   score: {result.score:.3f}")
    print(f"   confidence: {result.confidence:.3f}")

    print("\n4. REASONING:")
    if result.reasoning:
        for line in result.reasoning:
            print(f"   - {line}")
    else:
        print("   (no notable signal)")

    matching = settings.get("matching", {})
    auto_merge = matching.get("auto_merge_threshold", 0.90)
    min_confidence = matching.get("min_confidence", 0.70)

    print("\n5. DECISION:")
    if result.confidence >= auto_merge:
        print(f"   AUTO-MERGE: {result.confidence:.2f} >= {auto_merge}")
    elif result.confidence >= min_confidence:
        print(f"   REVIEW: {min_confidence} <= {result.confidence:.2f} < {auto_merge}")
    else:
        print(f"   DISTINCT: {result.confidence:.2f} < {min_confidence}")

    print("=" * 80)
    return result.confidence


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Trace similarity scoring for two product names",
    )
    parser.add_argument("name_a", help="First product name")
    parser.add_argument("name_b", help="Second product name")
    parser.add_argument(
        "--config", default=str(get_config_path()), help="Path to config file",
    )
    parser.add_argument(
        "--auto-merge", type=float, default=None,
        help="Auto-merge confidence threshold (overrides config)",
    )

    args = parser.parse_args()

    settings = load_settings(args.config)
    if args.auto_merge is not None:
        settings = {
            **settings,
            "matching": {**settings.get("matching", {}), "auto_merge_threshold": args.auto_merge},
        }

    confidence = trace_scoring(args.name_a, args.name_b, settings)
    print(f"\nFINAL RESULT: {confidence * 100:.0f}% confidence")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
