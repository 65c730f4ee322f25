"""Utility modules for product identity resolution.
"""

from .io_utils import (
    get_settings_load_count,
    load_settings,
    read_product_catalog,
    read_product_names,
    reload_settings,
)
from .logging_utils import get_logger, setup_logging
from .path_utils import get_config_path, get_project_root

__all__ = [
    "get_config_path",
    "get_logger",
    "get_project_root",
    "get_settings_load_count",
    "load_settings",
    "read_product_catalog",
    "read_product_names",
    "reload_settings",
    "setup_logging",
]
