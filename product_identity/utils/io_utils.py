"""IO utilities: settings loading and product-name file readers."""

import copy
import functools
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd
import yaml

from product_identity.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Settings loading counter for debugging
_settings_load_count = 0

DEFAULTS: dict[str, Any] = {
    "matching": {
        "min_confidence": 0.70,
        "max_results": 5,
        "auto_merge_threshold": 0.90,
        "review_max_matches": 3,
    },
    "scan": {
        "min_confidence": 0.70,
        "max_products": 500,
        "high_confidence": 0.90,
        "progress_every": 10,
    },
    "io": {
        "name_column": "product_name",
        "id_column": "product_id",
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


def _deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


@functools.lru_cache(maxsize=1)
def load_settings(path: str) -> dict[str, Any]:
    """Load settings from YAML file with defaults.

    This function is cached to prevent repeated file I/O and parsing.
    Use reload_settings() to force a fresh load.

    Args:
        path: Path to settings YAML file

    Returns:
        Dictionary with settings (user config merged over defaults)

    """
    global _settings_load_count
    _settings_load_count += 1

    logger.debug(f"Settings loaded (count: {_settings_load_count}) from {path}")

    settings = copy.deepcopy(DEFAULTS)
    try:
        with open(path) as f:
            user_config = yaml.safe_load(f) or {}
        if not isinstance(user_config, dict):
            logger.warning(f"Settings file {path} is not a mapping. Using defaults.")
            return settings
        return _deep_merge(settings, user_config)

    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return settings
    except (OSError, yaml.YAMLError) as e:
        logger.exception(f"Error loading settings: {e}. Using defaults.")
        return settings


def reload_settings(path: str) -> dict[str, Any]:
    """Force reload settings from file (clears cache).

    Args:
        path: Path to settings YAML file

    Returns:
        Freshly loaded settings

    """
    load_settings.cache_clear()
    return load_settings(path)


def get_settings_load_count() -> int:
    """Get the total number of times settings have been loaded."""
    return _settings_load_count


def detect_file_format(path: Union[str, Path]) -> str:
    """Detect file format from the extension.

    Args:
        path: File path to analyze

    Returns:
        'csv', 'xlsx' or 'unsupported'

    """
    suffix = Path(path).suffix.lower()
    if suffix in (".csv", ".txt"):
        return "csv"
    if suffix == ".xlsx":
        return "xlsx"
    return "unsupported"


def read_product_catalog(
    path: Union[str, Path],
    *,
    sheet: Optional[str] = None,
) -> pd.DataFrame:
    """Read a product list from CSV or Excel as strings.

    Args:
        path: Path to the file
        sheet: Optional Excel sheet name (first sheet when omitted)

    Returns:
        DataFrame with all columns read as strings

    Raises:
        ValueError: If the file format is unsupported

    """
    fmt = detect_file_format(path)
    if fmt == "csv":
        df = pd.read_csv(path, dtype=str)
    elif fmt == "xlsx":
        df = pd.read_excel(path, dtype=str, engine="openpyxl", sheet_name=sheet or 0)
    else:
        raise ValueError(f"Unsupported file format for: {path}")

    logger.info(f"Read {len(df)} rows from {path}")
    return df


def read_product_names(
    path: Union[str, Path],
    column: str = "product_name",
    *,
    sheet: Optional[str] = None,
) -> list[str]:
    """Read distinct product names from one column of a CSV or Excel file.

    Args:
        path: Path to the file
        column: Column holding product names
        sheet: Optional Excel sheet name

    Returns:
        Non-empty, stripped names in first-seen order

    Raises:
        ValueError: If the format is unsupported or the column is missing

    """
    df = read_product_catalog(path, sheet=sheet)
    if column not in df.columns:
        raise ValueError(
            f"Column '{column}' not found in {path}; available: {list(df.columns)}",
        )

    names: list[str] = []
    seen: set[str] = set()
    for value in df[column].dropna():
        name = str(value).strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names
