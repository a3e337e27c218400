"""Duplicate URL detection across a promo catalog."""

from typing import Dict, List, Sequence

from ..models.promo import PromoEntry
from ..models.validation import DuplicateUrlGroup
from ..utils.error_handling import InvalidUrl
from .normalizer import normalize_url


def group_by_normalized_url(
    entries: Sequence[PromoEntry],
) -> Dict[str, List[PromoEntry]]:
    """
    Group entries by normalized URL, keeping first-seen order.

    Raises:
        InvalidUrl: Naming the first entry whose URL cannot be parsed.
    """
    groups: Dict[str, List[PromoEntry]] = {}

    for entry in entries:
        try:
            normalized = normalize_url(entry.url)
        except InvalidUrl as e:
            raise e.for_entry(entry.id) from e
        groups.setdefault(normalized, []).append(entry)

    return groups


def find_duplicate_urls(entries: Sequence[PromoEntry]) -> List[DuplicateUrlGroup]:
    """
    Find entries that share a normalized URL.

    Only groups of two or more entries are returned, in the order their
    URL was first seen.
    """
    return [
        DuplicateUrlGroup(normalized_url=normalized_url, entries=grouped)
        for normalized_url, grouped in group_by_normalized_url(entries).items()
        if len(grouped) > 1
    ]
