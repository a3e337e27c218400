"""
Catalog loading.

Reads promo entries from a YAML or JSON file. The file holds either a
list of entries or a mapping with a ``promos`` list. URLs are not checked
here; that is the validator's job, under the caller's invalid-URL policy.
"""

import json
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..models.promo import PromoEntry
from ..utils.error_handling import CatalogError
from ..utils.logging import get_logger

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "promos.yaml"

logger = get_logger("catalog.loader")


class CatalogLoader:
    """Loads a promo catalog from disk."""

    def __init__(self, catalog_path: Optional[str] = None):
        """
        Args:
            catalog_path: Catalog file; defaults to the bundled catalog.
        """
        self.catalog_path = str(catalog_path or DEFAULT_CATALOG_PATH)

    def _read_raw(self) -> Any:
        if not os.path.exists(self.catalog_path):
            raise CatalogError(f"Catalog file not found: {self.catalog_path}")

        try:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                if self.catalog_path.endswith(".json"):
                    return json.load(f)
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in catalog file: {e}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in catalog file: {e}") from e
        except OSError as e:
            raise CatalogError(f"Cannot read catalog file {self.catalog_path}: {e}") from e

    def load(self) -> List[PromoEntry]:
        """
        Load all entries, in file order.

        Raises:
            CatalogError: If the file is missing, unparseable, or holds a
                malformed entry.
        """
        raw = self._read_raw()

        if isinstance(raw, dict):
            raw = raw.get("promos")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise CatalogError("Catalog must be a list of entries or a mapping with 'promos'")

        entries: List[PromoEntry] = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                raise CatalogError(f"Catalog entry #{index} is not a mapping")
            try:
                entries.append(PromoEntry.from_dict(item))
            except (TypeError, ValueError) as e:
                entry_id = item.get("id", f"#{index}")
                raise CatalogError(f"Malformed catalog entry {entry_id}: {e}") from e

        logger.info(
            "Catalog loaded",
            extra={"catalog_path": self.catalog_path, "entries": len(entries)},
        )
        return entries


def load_catalog(catalog_path: Optional[str] = None) -> List[PromoEntry]:
    """Load a catalog file, defaulting to the bundled catalog."""
    return CatalogLoader(catalog_path).load()
