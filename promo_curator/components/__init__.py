"""
Core components for the promo curator.

This module contains URL and title normalization, the duplicate URL and
fuzzy title detectors, the validation aggregator, the expiry checker and
report formatting.
"""

from .duplicate_detector import find_duplicate_urls
from .expiry_checker import find_expired_promos
from .normalizer import normalize_title, normalize_url
from .promo_validator import check_submission, validate_promo_entries
from .report_formatter import ReportFormatter
from .title_matcher import (
    find_fuzzy_title_matches,
    find_title_conflicts,
    title_similarity,
    tokenize_title,
)

__all__ = [
    "normalize_url",
    "normalize_title",
    "find_duplicate_urls",
    "tokenize_title",
    "title_similarity",
    "find_fuzzy_title_matches",
    "find_title_conflicts",
    "validate_promo_entries",
    "check_submission",
    "find_expired_promos",
    "ReportFormatter",
]
