"""Pairwise duplicate scan over a product catalog."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any, Optional

import pandas as pd

from product_identity.parsing import parse_product_name
from product_identity.similarity.scoring import calculate_component_similarity
from product_identity.similarity.types import ScanSummary

logger = logging.getLogger(__name__)

PAIR_COLUMNS = [
    "product1_id",
    "product2_id",
    "product1_name",
    "product2_name",
    "confidence_score",
    "score",
    "brand_score",
    "product_type_score",
    "volume_score",
    "package_count_score",
    "tokens_score",
    "reasoning",
]


def _pair_key(id_a: Any, id_b: Any) -> frozenset[str]:
    return frozenset((str(id_a), str(id_b)))


def scan_for_duplicates(
    catalog_df: pd.DataFrame,
    name_column: str = "product_name",
    id_column: str = "product_id",
    settings: Optional[dict[str, Any]] = None,
    known_pairs: Optional[Iterable[tuple[Any, Any]]] = None,
) -> tuple[pd.DataFrame, ScanSummary]:
    """Find probable duplicate products within one catalog.

    Args:
        catalog_df: Catalog with a name column and optionally an id column
            and a total_revenue column (highest revenue scanned first)
        name_column: Column holding product names
        id_column: Column holding product ids (row index used when absent)
        settings: Configuration settings ("scan" section)
        known_pairs: Id pairs already recorded as candidates; not re-reported

    Returns:
        Tuple of (candidate pairs sorted by confidence, scan summary)

    Raises:
        ValueError: If name_column is not in catalog_df

    """
    if name_column not in catalog_df.columns:
        raise ValueError(f"Name column '{name_column}' not found in catalog")

    scan_settings = (settings or {}).get("scan", {})
    min_confidence = scan_settings.get("min_confidence", 0.70)
    max_products = scan_settings.get("max_products", 500)
    high_confidence = scan_settings.get("high_confidence", 0.90)
    progress_every = scan_settings.get("progress_every", 10)

    start_time = time.perf_counter()

    df = catalog_df
    if "total_revenue" in df.columns:
        revenue = pd.to_numeric(df["total_revenue"], errors="coerce").reset_index(drop=True)
        order = revenue.sort_values(
            ascending=False, kind="mergesort", na_position="last",
        ).index
        df = df.iloc[order]
    df = df.head(max_products)

    ids = df[id_column].tolist() if id_column in df.columns else df.index.tolist()
    names = ["" if pd.isna(v) else str(v) for v in df[name_column]]
    parsed = [parse_product_name(name) for name in names]

    logger.info(
        f"Duplicate scan started: {len(parsed)} products, "
        f"minimum confidence {min_confidence}",
    )

    seen_pairs = {_pair_key(a, b) for a, b in (known_pairs or [])}
    records: list[dict[str, Any]] = []

    for i in range(len(parsed)):
        for j in range(i + 1, len(parsed)):
            key = _pair_key(ids[i], ids[j])
            if key in seen_pairs:
                continue
            seen_pairs.add(key)

            similarity = calculate_component_similarity(parsed[i], parsed[j])
            if similarity.confidence < min_confidence:
                continue

            component_scores = similarity.component_scores
            records.append(
                {
                    "product1_id": ids[i],
                    "product2_id": ids[j],
                    "product1_name": names[i],
                    "product2_name": names[j],
                    "confidence_score": similarity.confidence,
                    "score": similarity.score,
                    "brand_score": component_scores["brand"],
                    "product_type_score": component_scores["product_type"],
                    "volume_score": component_scores["volume"],
                    "package_count_score": component_scores["package_count"],
                    "tokens_score": component_scores["tokens"],
                    "reasoning": "; ".join(similarity.reasoning),
                },
            )
            logger.debug(
                f"Found duplicate: '{names[i]}' ≈ '{names[j]}' "
                f"({similarity.confidence * 100:.0f}%)",
            )

        if progress_every and i > 0 and i % progress_every == 0:
            logger.info(
                f"Progress: {i}/{len(parsed)} products scanned, "
                f"{len(records)} candidates found",
            )

    pairs_df = pd.DataFrame.from_records(records, columns=PAIR_COLUMNS)
    pairs_df = pairs_df.sort_values(
        "confidence_score", ascending=False, kind="mergesort",
    ).reset_index(drop=True)

    summary = ScanSummary(
        products_scanned=len(parsed),
        candidates_found=len(pairs_df),
        high_confidence_count=int((pairs_df["confidence_score"] >= high_confidence).sum()),
        duration_seconds=time.perf_counter() - start_time,
    )

    logger.info(
        f"Duplicate scan completed: {summary.products_scanned} products, "
        f"{summary.candidates_found} candidates, "
        f"{summary.high_confidence_count} high confidence, "
        f"{summary.duration_seconds:.1f}s",
    )

    return pairs_df, summary
