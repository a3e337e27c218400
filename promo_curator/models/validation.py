"""
Result models produced by the validation engine.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple

from ..utils.error_handling import InvalidUrl
from .promo import PromoEntry


@dataclass
class DuplicateUrlGroup:
    """Two or more entries sharing a normalized URL."""

    normalized_url: str
    entries: List[PromoEntry]


@dataclass
class FuzzyTitleMatch:
    """A pair of entries whose title similarity met the threshold."""

    similarity: float
    entries: Tuple[PromoEntry, PromoEntry]

    def validate(self) -> bool:
        """Validate match data."""
        if not isinstance(self.similarity, (int, float)):
            raise ValueError("similarity must be a number")

        if not (0 <= self.similarity <= 1):
            raise ValueError("similarity must be between 0 and 1")

        if len(self.entries) != 2:
            raise ValueError("a fuzzy title match pairs exactly two entries")

        return True


@dataclass
class ValidationReport:
    """Combined outcome of validating a catalog."""

    duplicate_urls: List[DuplicateUrlGroup]
    fuzzy_title_matches: List[FuzzyTitleMatch]
    invalid_urls: List[InvalidUrl] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.duplicate_urls or self.fuzzy_title_matches or self.invalid_urls)


@dataclass
class SubmissionCheckResult:
    """Outcome of checking one proposed entry against the catalog."""

    candidate: PromoEntry
    url_conflicts: List[PromoEntry]
    title_conflicts: List[FuzzyTitleMatch]
    invalid_urls: List[InvalidUrl] = field(default_factory=list)

    @property
    def is_duplicate(self) -> bool:
        return bool(self.url_conflicts or self.title_conflicts)


@dataclass
class ExpiredPromo:
    """An entry whose expiry date has passed."""

    entry: PromoEntry
    expired_on: date

    def to_dict(self):
        return {
            "id": self.entry.id,
            "title": self.entry.title,
            "url": self.entry.url,
            "expiry_date": self.expired_on.isoformat(),
        }
