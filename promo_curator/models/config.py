"""
Configuration models for the validator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.logging import LogLevel


class InvalidUrlPolicy(Enum):
    """What the validator does with entries whose URL cannot be parsed."""

    RAISE = "raise"  # propagate InvalidUrl to the caller
    SKIP = "skip"  # leave the entry out of URL grouping and report it


@dataclass
class ValidatorConfig:
    """Settings for catalog validation runs."""

    catalog_path: Optional[str] = None
    title_similarity_threshold: float = 0.9
    invalid_url_policy: InvalidUrlPolicy = InvalidUrlPolicy.RAISE
    log_level: str = "WARNING"
    log_dir: Optional[str] = None

    def validate(self) -> bool:
        """Validate configuration values."""
        if self.catalog_path is not None and not str(self.catalog_path).strip():
            raise ValueError("Catalog path cannot be empty")

        threshold = self.title_similarity_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ValueError("Title similarity threshold must be a number")

        if not (0 <= threshold <= 1):
            raise ValueError("Title similarity threshold must be between 0 and 1")

        if not isinstance(self.invalid_url_policy, InvalidUrlPolicy):
            raise ValueError("invalid_url_policy must be an InvalidUrlPolicy enum")

        valid_levels = [level.value for level in LogLevel]
        if str(self.log_level).upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")

        return True
