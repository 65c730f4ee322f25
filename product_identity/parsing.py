"""Structured product-name parsing for distributor depletion data.

This module handles:
- Volume extraction with unit normalization to millilitres
- Package-count extraction (6pk, 6-pack, case of 12, 12 x 750ml, ...)
- Brand detection from curated vocabularies with a positional fallback
- Product-type (beverage category) detection
- Tokenization and brand-variant-collapsing name normalization
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VolumeInfo:
    """Volume parsed from a product name."""

    value: float
    unit: str  # ml/l/oz/gal/pt/qt
    standardized_ml: float
    matched_text: str


@dataclass(frozen=True)
class ProductComponents:
    """Semantic components of a free-text product name."""

    brand: str
    product_type: str
    volume: str
    volume_ml: Optional[float]
    package_count: int
    descriptors: tuple[str, ...]
    original_name: str
    normalized_name: str
    tokens: tuple[str, ...]


# Millilitres per unit
VOLUME_CONVERSIONS = {
    "ml": 1.0,
    "l": 1000.0,
    "oz": 29.5735,
    "gal": 3785.41,
    "pt": 473.176,
    "qt": 946.353,
}

STOP_WORDS = frozenset({"the", "a", "an", "of", "for", "and", "or"})

# Checked in order; every word must appear in the name
MULTI_WORD_BRANDS = (
    "grey goose",
    "gray goose",
    "jack daniels",
    "jack daniel",
    "makers mark",
    "jim beam",
    "johnnie walker",
    "johnny walker",
    "jose cuervo",
    "don julio",
    "captain morgan",
    "crown royal",
    "stella artois",
    "dos equis",
    "modelo especial",
    "corona extra",
    "bud light",
    "miller lite",
    "coors light",
    "havana club",
    "remy martin",
    "grand marnier",
    "southern comfort",
    "ketel one",
    "hendricks",
    "dewars",
    "buchanans",
)

KNOWN_BRANDS = (
    "avua",
    "grey goose",
    "gray goose",
    "greygoose",
    "jack daniels",
    "jack daniel",
    "makers mark",
    "jim beam",
    "johnnie walker",
    "johnny walker",
    "jose cuervo",
    "patron",
    "titos",
    "dos equis",
    "modelo",
    "corona",
    "bud light",
    "budweiser",
    "miller",
    "coors",
    "heineken",
    "stella artois",
    "guinness",
    "absolut",
    "smirnoff",
    "bacardi",
    "captain morgan",
    "tanqueray",
    "bombay",
    "hendricks",
    "ketel one",
    "ciroc",
    "belvedere",
    "skyy",
    "jameson",
    "crown royal",
    "chivas",
    "glenlivet",
    "glenfiddich",
    "macallan",
    "lagavulin",
    "johnnie",
    "walker",
    "dewars",
    "buchanans",
    "don julio",
    "casamigos",
    "espolon",
    "olmeca",
    "sauza",
    "cuervo",
    "havana club",
    "diplomatico",
    "zacapa",
    "appleton",
    "brugal",
    "hennessy",
    "remy martin",
    "courvoisier",
    "martell",
    "jagermeister",
    "aperol",
    "campari",
    "cointreau",
    "grand marnier",
    "kahlua",
    "baileys",
    "fireball",
    "southern comfort",
    "malibu",
    "midori",
    "pernod",
    "sambuca",
    "paladar",
    "svol",
    "drifter",
    "aquavit",
    "reposado",
    "anejo",
    "blanco",
)

_KNOWN_BRAND_SET = frozenset(KNOWN_BRANDS)

# Applied in order to the punctuation-stripped name ("tito's" -> "tito s")
COMMON_BRAND_VARIATIONS = (
    ("grey goose", "greygoose"),
    ("gray goose", "greygoose"),
    ("jack daniel s", "jackdaniels"),
    ("jack daniels", "jackdaniels"),
    ("jack daniel", "jackdaniels"),
    ("maker s mark", "makersmark"),
    ("makers mark", "makersmark"),
    ("jim beam", "jimbeam"),
    ("johnnie walker", "johnniewalker"),
    ("johnny walker", "johnniewalker"),
    ("jose cuervo", "josecuervo"),
    ("tito s", "titos"),
    ("dos equis", "dosequis"),
    ("modelo especial", "modeloespecial"),
    ("corona extra", "coronaextra"),
    ("bud light", "budlight"),
    ("miller lite", "millerlite"),
    ("coors light", "coorslight"),
    ("hendrick s", "hendricks"),
    ("dewar s", "dewars"),
    ("buchanan s", "buchanans"),
)

_BRAND_VARIATION_PATTERNS = tuple(
    (re.compile(rf"\b{re.escape(variant)}\b"), replacement)
    for variant, replacement in COMMON_BRAND_VARIATIONS
)

COMMON_PRODUCT_TYPES = (
    "vodka",
    "whiskey",
    "whisky",
    "bourbon",
    "scotch",
    "gin",
    "rum",
    "tequila",
    "brandy",
    "cognac",
    "liqueur",
    "beer",
    "wine",
    "champagne",
    "prosecco",
    "cachaca",
    "mezcal",
    "sake",
    "soju",
    "absinthe",
    "vermouth",
    "port",
    "sherry",
    "amaro",
    "aquavit",
    "grappa",
    "armagnac",
    "calvados",
    "pisco",
)

_NUMBER = r"([0-9]+(?:\.[0-9]+)?)"
_APOSTROPHES = re.compile(r"['’`]")
_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class VolumeMatcher:
    """Regex for one volume unit, tried in priority order."""

    unit: str
    pattern: re.Pattern[str]

    def try_match(self, text: str) -> Optional[VolumeInfo]:
        match = self.pattern.search(text)
        if not match:
            return None
        value = float(match.group(1))
        return VolumeInfo(
            value=value,
            unit=self.unit,
            standardized_ml=value * VOLUME_CONVERSIONS[self.unit],
            matched_text=match.group(0),
        )


@dataclass(frozen=True)
class PackageMatcher:
    """Regex for one package-count notation, tried in priority order."""

    label: str
    pattern: re.Pattern[str]

    def try_match(self, text: str) -> Optional[int]:
        for match in self.pattern.finditer(text):
            try:
                count = int(match.group(1))
            except ValueError:
                # Digit run beyond the interpreter's int conversion limit
                continue
            if count >= 1:
                return count
        return None


# ml before l so "750mL" is never read as litres; bare "M" covers "750M"
VOLUME_MATCHERS = (
    VolumeMatcher("ml", re.compile(rf"{_NUMBER}\s*(?:ml|m)\b", re.IGNORECASE)),
    VolumeMatcher(
        "l", re.compile(rf"{_NUMBER}\s*(?:liters?|litres?|l)\b", re.IGNORECASE),
    ),
    VolumeMatcher(
        "oz",
        re.compile(rf"{_NUMBER}\s*(?:fl\.?\s*)?(?:oz|ounces?)\b", re.IGNORECASE),
    ),
    VolumeMatcher("gal", re.compile(rf"{_NUMBER}\s*(?:gallons?|gal)\b", re.IGNORECASE)),
    VolumeMatcher("pt", re.compile(rf"{_NUMBER}\s*(?:pints?|pt)\b", re.IGNORECASE)),
    VolumeMatcher("qt", re.compile(rf"{_NUMBER}\s*(?:quarts?|qt)\b", re.IGNORECASE)),
)

PACKAGE_MATCHERS = (
    PackageMatcher("pk", re.compile(r"([0-9]+)\s*pk", re.IGNORECASE)),
    PackageMatcher("pack", re.compile(r"([0-9]+)\s*pack", re.IGNORECASE)),
    PackageMatcher("dash-pack", re.compile(r"([0-9]+)\s*-\s*pack", re.IGNORECASE)),
    PackageMatcher("bottle", re.compile(r"([0-9]+)\s*bottle", re.IGNORECASE)),
    PackageMatcher("btl", re.compile(r"([0-9]+)\s*btl", re.IGNORECASE)),
    PackageMatcher("case-of", re.compile(r"case\s*of\s*([0-9]+)", re.IGNORECASE)),
    PackageMatcher("ct", re.compile(r"([0-9]+)\s*ct", re.IGNORECASE)),
    PackageMatcher("count", re.compile(r"([0-9]+)\s*count", re.IGNORECASE)),
    PackageMatcher("times", re.compile(r"([0-9]+)\s*[x×]\s*(?=[0-9])", re.IGNORECASE)),
)


def _title_words(phrase: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split())


def _format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _strip_punctuation(text: str) -> str:
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def extract_volume(text: str) -> Optional[VolumeInfo]:
    """Extract the first volume found in priority order of unit matchers.

    Args:
        text: Raw product name

    Returns:
        VolumeInfo or None when no volume notation is present

    """
    for matcher in VOLUME_MATCHERS:
        info = matcher.try_match(text)
        if info is not None:
            return info
    return None


def extract_package_count(text: str) -> int:
    """Extract units per package, defaulting to a single unit."""
    for matcher in PACKAGE_MATCHERS:
        count = matcher.try_match(text)
        if count is not None:
            return count
    return 1


def normalize_product_name(name: str) -> str:
    """Normalize a product name for exact-match shortcuts.

    Lowercases, turns punctuation into whitespace, collapses whitespace and
    collapses known brand spelling variants into a single token.

    Args:
        name: Raw product name

    Returns:
        Normalized name

    """
    normalized = _strip_punctuation(name)
    for pattern, replacement in _BRAND_VARIATION_PATTERNS:
        normalized = pattern.sub(replacement, normalized)
    return normalized.strip()


def tokenize_product_name(name: str, volume: Optional[VolumeInfo] = None) -> list[str]:
    """Split a name into comparison tokens without volume and package notation.

    Args:
        name: Raw product name
        volume: Previously extracted volume (extracted here when omitted)

    Returns:
        Lowercase tokens in source order

    """
    if volume is None:
        volume = extract_volume(name)

    # Package notation first: "12 x" is only recognized while "750ml" follows it
    remainder = name
    for matcher in PACKAGE_MATCHERS:
        remainder = matcher.pattern.sub(" ", remainder)

    if volume is not None:
        remainder = re.sub(re.escape(volume.matched_text), " ", remainder, flags=re.IGNORECASE)

    return [
        token
        for token in _NON_WORD.sub(" ", remainder.lower()).split()
        if len(token) > 1 and token not in STOP_WORDS
    ]


def extract_brand_with_source(text: str, tokens: list[str]) -> tuple[str, str]:
    """Detect the brand and report which detection branch decided it.

    Branches, in priority order: ``multi_word``, ``vocabulary``, ``token``,
    ``positional``. ``none`` is returned when the name has no usable tokens.

    Args:
        text: Raw product name
        tokens: Output of tokenize_product_name for the same name

    Returns:
        Tuple of (brand, source)

    """
    lookup = _strip_punctuation(_APOSTROPHES.sub("", text))

    for brand in MULTI_WORD_BRANDS:
        if all(word in lookup for word in brand.split()):
            return _title_words(brand), "multi_word"

    for brand in KNOWN_BRANDS:
        if len(brand) > 3 and brand in lookup:
            return _title_words(brand), "vocabulary"

    # Unreachable in practice: any qualifying token already matched above
    for token in lookup.split():
        if len(token) > 3 and token in _KNOWN_BRAND_SET:
            return _title_words(token), "token"

    if tokens:
        return _title_words(" ".join(tokens[:2])), "positional"

    return "", "none"


def extract_brand(text: str, tokens: list[str]) -> str:
    """Detect the brand of a product name."""
    brand, _ = extract_brand_with_source(text, tokens)
    return brand


def extract_product_type(text: str) -> str:
    """Detect the beverage category of a product name."""
    lower_text = text.lower()
    for product_type in COMMON_PRODUCT_TYPES:
        if product_type in lower_text:
            return product_type.capitalize()
    return ""


def parse_product_name(name: Optional[str]) -> ProductComponents:
    """Parse a raw product name into its semantic components.

    Never raises: missing components degrade to empty values and a package
    count of 1.

    Args:
        name: Raw product name

    Returns:
        ProductComponents for the name

    """
    if not isinstance(name, str):
        name = "" if name is None else str(name)

    volume = extract_volume(name)
    tokens = tokenize_product_name(name, volume)
    package_count = extract_package_count(name)
    brand = extract_brand(name, tokens)
    product_type = extract_product_type(name)

    brand_lower = brand.lower()
    type_lower = product_type.lower()
    descriptors = tuple(
        token
        for token in tokens
        if token not in brand_lower and token not in type_lower
    )

    return ProductComponents(
        brand=brand,
        product_type=product_type,
        volume=f"{_format_number(volume.value)}{volume.unit}" if volume else "",
        volume_ml=volume.standardized_ml if volume else None,
        package_count=package_count,
        descriptors=descriptors,
        original_name=name,
        normalized_name=normalize_product_name(name),
        tokens=tuple(tokens),
    )


def create_standardized_name(components: ProductComponents) -> str:
    """Build a display name: Brand Type Descriptors VolumemL [NPK].

    Args:
        components: Parsed product

    Returns:
        Standardized name, empty when nothing was parsed

    """
    parts: list[str] = []

    if components.brand:
        parts.append(components.brand)
    if components.product_type:
        parts.append(components.product_type)
    parts.extend(components.descriptors[:2])
    if components.volume_ml and math.isfinite(components.volume_ml):
        parts.append(f"{math.floor(components.volume_ml + 0.5)}mL")
    if components.package_count > 1:
        parts.append(f"{components.package_count}PK")

    return " ".join(part[:1].upper() + part[1:] for part in parts if part)


def parse_dataframe(
    df: pd.DataFrame,
    name_column: str = "product_name",
) -> pd.DataFrame:
    """Parse the product-name column of a DataFrame.

    Args:
        df: Input DataFrame
        name_column: Column containing raw product names

    Returns:
        Copy of df with parsed component columns added

    """
    if name_column not in df.columns:
        logger.warning(f"Name column '{name_column}' not found in DataFrame")
        return df

    parsed = [
        parse_product_name(str(val) if pd.notna(val) else "")
        for val in df[name_column]
    ]

    df = df.copy()
    df["brand"] = [p.brand for p in parsed]
    df["product_type"] = [p.product_type for p in parsed]
    df["volume"] = [p.volume for p in parsed]
    df["volume_ml"] = pd.Series(
        [p.volume_ml for p in parsed], index=df.index, dtype="float64",
    )
    df["package_count"] = pd.Series(
        [p.package_count for p in parsed], index=df.index, dtype="int64",
    )
    # List-valued columns stay 1-D object columns
    df["descriptors"] = pd.Series(
        [list(p.descriptors) for p in parsed], index=df.index, dtype=object,
    )
    df["normalized_name"] = [p.normalized_name for p in parsed]
    df["tokens"] = pd.Series(
        [list(p.tokens) for p in parsed], index=df.index, dtype=object,
    )

    return df


def components_to_dict(components: ProductComponents) -> dict[str, Any]:
    """Plain-dict view of parsed components (for logging and CSV output)."""
    return {
        "brand": components.brand,
        "product_type": components.product_type,
        "volume": components.volume,
        "volume_ml": components.volume_ml,
        "package_count": components.package_count,
        "descriptors": list(components.descriptors),
        "original_name": components.original_name,
        "normalized_name": components.normalized_name,
        "tokens": list(components.tokens),
    }
