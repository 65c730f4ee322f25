#!/usr/bin/env python3
"""Scan Duplicates CLI - find probable duplicate products within one catalog.

Usage:
    python scripts/scan_duplicates.py catalog.csv --output duplicate_candidates.csv
    python scripts/scan_duplicates.py catalog.xlsx --column "Product" --id-column "SKU"
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from product_identity.similarity.duplicate_scan import scan_for_duplicates  # noqa: E402
from product_identity.utils.io_utils import (  # noqa: E402
    load_settings,
    read_product_catalog,
)
from product_identity.utils.logging_utils import (  # noqa: E402
    DEFAULT_FORMAT,
    setup_logging,
)
from product_identity.utils.path_utils import get_config_path  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scan a product catalog for probable duplicates",
    )
    parser.add_argument("catalog", help="CSV or XLSX product catalog")
    parser.add_argument("--column", default=None, help="Column holding product names")
    parser.add_argument("--id-column", default=None, help="Column holding product ids")
    parser.add_argument("--sheet", default=None, help="Excel sheet name")
    parser.add_argument(
        "--output", default="duplicate_candidates.csv", help="Output CSV path",
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

    io_settings = settings.get("io", {})
    name_column = args.column or io_settings.get("name_column", "product_name")
    id_column = args.id_column or io_settings.get("id_column", "product_id")

    try:
        catalog = read_product_catalog(args.catalog, sheet=args.sheet)
        pairs_df, summary = scan_for_duplicates(
            catalog, name_column=name_column, id_column=id_column, settings=settings,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Duplicate scan failed: {e}")
        return 1

    pairs_df.to_csv(args.output, index=False)
    logger.info(f"Duplicate candidates saved to {args.output}")

    print(f"Products scanned: {summary.products_scanned}")
    print(f"Candidates found: {summary.candidates_found}")
    print(f"High confidence: {summary.high_confidence_count}")
    print(f"Duration: {summary.duration_seconds:.1f}s")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
