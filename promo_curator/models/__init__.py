"""
Data models for the promo curator.

This module contains the catalog entry types, the result types produced
by the validation engine, and the validator configuration.
"""

from .config import InvalidUrlPolicy, ValidatorConfig
from .promo import ONGOING, PromoCategory, PromoEntry, PromoTag
from .validation import (
    DuplicateUrlGroup,
    ExpiredPromo,
    FuzzyTitleMatch,
    SubmissionCheckResult,
    ValidationReport,
)

__all__ = [
    "ONGOING",
    "PromoEntry",
    "PromoCategory",
    "PromoTag",
    "DuplicateUrlGroup",
    "FuzzyTitleMatch",
    "ValidationReport",
    "SubmissionCheckResult",
    "ExpiredPromo",
    "InvalidUrlPolicy",
    "ValidatorConfig",
]
