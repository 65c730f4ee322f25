#!/usr/bin/env python3
"""Match Products CLI - rank a product name against a list of known names.

Usage:
    python scripts/match_products.py "AVUA PRATA CACHACA 6PK 750M" --candidates catalog.csv
    python scripts/match_products.py "Titos 1.75L" --candidates catalog.xlsx --column "Product"
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from product_identity.similarity.matching import find_best_matches  # noqa: E402
from product_identity.utils.io_utils import (  # noqa: E402
    load_settings,
    read_product_names,
)
from product_identity.utils.logging_utils import (  # noqa: E402
    DEFAULT_FORMAT,
    setup_logging,
)
from product_identity.utils.path_utils import get_config_path  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Rank known product names against a newly observed name",
    )
    parser.add_argument("name", help="Newly observed product name")
    parser.add_argument(
        "--candidates", required=True, help="CSV or XLSX file of known product names",
    )
    parser.add_argument("--column", default=None, help="Column holding product names")
    parser.add_argument("--sheet", default=None, help="Excel sheet name")
    parser.add_argument(
        "--min-confidence", type=float, default=None,
        help="Confidence floor (overrides config)",
    )
    parser.add_argument(
        "--config", default=str(get_config_path()), help="Path to config file",
    )
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    log_settings = settings.get("logging", {})
    setup_logging(
        log_settings.get("level", "INFO"),
        log_settings.get("file"),
        log_settings.get("format") or DEFAULT_FORMAT,
    )

    matching = settings.get("matching", {})
    column = args.column or settings.get("io", {}).get("name_column", "product_name")
    min_confidence = (
        args.min_confidence
        if args.min_confidence is not None
        else matching.get("min_confidence", 0.70)
    )

    try:
        candidates = read_product_names(args.candidates, column, sheet=args.sheet)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not read candidates: {e}")
        return 1

    matches = find_best_matches(
        args.name,
        candidates,
        min_confidence=min_confidence,
        max_results=matching.get("max_results", 5),
    )

    if not matches:
        print(f"No match at or above {min_confidence:.2f} for '{args.name}'")
        return 0

    auto_merge = matching.get("auto_merge_threshold", 0.90)
    for rank, match in enumerate(matches, start=1):
        flag = "auto-merge" if match.similarity.confidence >= auto_merge else "review"
        print(f"{rank}. {match.candidate}  {match.similarity.confidence:.2f} [{flag}]")
        for line in match.similarity.reasoning:
            print(f"     - {line}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
