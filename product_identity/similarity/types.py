"""Type definitions for product similarity scoring.

This module provides structured value types for scoring and ranking results
so callers never have to reach into loosely-typed dictionaries.
"""

from dataclasses import dataclass, field
from typing import Literal, TypedDict


class ComponentScores(TypedDict):
    """Per-component similarities of two parsed products, each in [0, 1]."""

    brand: float
    product_type: float
    volume: float
    package_count: float
    tokens: float
    overall: float


@dataclass(frozen=True)
class SimilarityResult:
    """Outcome of comparing two product names.

    ``score`` is the raw weighted blend of component similarities;
    ``confidence`` is the score raised by the escalation rules and is never
    below ``score``.
    """

    score: float
    confidence: float
    component_scores: ComponentScores
    reasoning: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BestMatch:
    """A ranked candidate returned by find_best_matches."""

    candidate: str
    similarity: SimilarityResult


Decision = Literal["auto_merge", "review", "new_product"]


@dataclass(frozen=True)
class ProductMatch:
    """A known product that a new name may duplicate."""

    existing_product_name: str
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class DuplicateAnalysis:
    """Duplicate-detection outcome for one newly observed product name."""

    product_name: str
    matches: list[ProductMatch]
    should_auto_merge: bool
    suggested_canonical_name: str

    @property
    def decision(self) -> Decision:
        if self.should_auto_merge:
            return "auto_merge"
        if self.matches:
            return "review"
        return "new_product"


@dataclass(frozen=True)
class ScanSummary:
    """Totals reported by a catalog duplicate scan."""

    products_scanned: int
    candidates_found: int
    high_confidence_count: int
    duration_seconds: float
