"""
Service layer for the promo curator.

This module contains configuration loading and catalog loading, the two
places the tooling touches the filesystem.
"""

from .catalog_loader import DEFAULT_CATALOG_PATH, CatalogLoader, load_catalog
from .config_manager import ConfigurationManager

__all__ = [
    "CatalogLoader",
    "ConfigurationManager",
    "DEFAULT_CATALOG_PATH",
    "load_catalog",
]
