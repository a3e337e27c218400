"""
Catalog validation: duplicate URLs and fuzzy title collisions.

``validate_promo_entries`` is the entry point for whole-catalog checks and
``check_submission`` the one for a single proposed entry. Neither performs
I/O; callers load the catalog and decide how to report the results.
"""

from typing import List, Sequence, Tuple

from ..models.config import InvalidUrlPolicy
from ..models.promo import PromoEntry
from ..models.validation import (
    DuplicateUrlGroup,
    SubmissionCheckResult,
    ValidationReport,
)
from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    InvalidUrl,
    get_error_tracker,
)
from ..utils.logging import get_logger
from .duplicate_detector import find_duplicate_urls
from .normalizer import normalize_url
from .title_matcher import (
    DEFAULT_THRESHOLD,
    find_fuzzy_title_matches,
    find_title_conflicts,
)

logger = get_logger("promo.validator")


def _partition_by_url_validity(
    entries: Sequence[PromoEntry], policy: InvalidUrlPolicy
) -> Tuple[List[PromoEntry], List[InvalidUrl]]:
    """Split entries into parseable ones and the errors for the rest."""
    valid: List[PromoEntry] = []
    invalid: List[InvalidUrl] = []

    for entry in entries:
        try:
            normalize_url(entry.url)
        except InvalidUrl as e:
            error = e.for_entry(entry.id)
            if policy is InvalidUrlPolicy.RAISE:
                raise error from e
            invalid.append(error)
            get_error_tracker().record_error(
                component="promo.validator",
                category=ErrorCategory.DATA_VALIDATION,
                severity=ErrorSeverity.MEDIUM,
                message=str(error),
                exception=error,
                context={"entry_id": entry.id, "url": str(entry.url)},
            )
            continue
        valid.append(entry)

    return valid, invalid


def validate_promo_entries(
    entries: Sequence[PromoEntry],
    threshold: float = DEFAULT_THRESHOLD,
    invalid_url_policy: InvalidUrlPolicy = InvalidUrlPolicy.RAISE,
) -> ValidationReport:
    """
    Run duplicate URL and fuzzy title detection over a catalog.

    Args:
        entries: Catalog entries to check
        threshold: Minimum title similarity reported as a fuzzy match
        invalid_url_policy: RAISE propagates ``InvalidUrl``; SKIP leaves
            those entries out of URL grouping and lists them in the report

    Returns:
        ValidationReport whose ``has_issues`` is true when anything was found

    Raises:
        InvalidUrl: Under the RAISE policy, for the first unparseable URL.
    """
    if invalid_url_policy is InvalidUrlPolicy.RAISE:
        duplicate_urls: List[DuplicateUrlGroup] = find_duplicate_urls(entries)
        invalid_urls: List[InvalidUrl] = []
    else:
        url_checked, invalid_urls = _partition_by_url_validity(
            entries, invalid_url_policy
        )
        duplicate_urls = find_duplicate_urls(url_checked)

    fuzzy_title_matches = find_fuzzy_title_matches(entries, threshold)

    report = ValidationReport(
        duplicate_urls=duplicate_urls,
        fuzzy_title_matches=fuzzy_title_matches,
        invalid_urls=invalid_urls,
    )

    logger.info(
        "Catalog validated",
        extra={
            "entries": len(entries),
            "threshold": threshold,
            "duplicate_url_groups": len(duplicate_urls),
            "fuzzy_title_matches": len(fuzzy_title_matches),
            "invalid_urls": len(invalid_urls),
            "has_issues": report.has_issues,
        },
    )

    return report


def check_submission(
    candidate: PromoEntry,
    catalog: Sequence[PromoEntry],
    threshold: float = DEFAULT_THRESHOLD,
    invalid_url_policy: InvalidUrlPolicy = InvalidUrlPolicy.RAISE,
) -> SubmissionCheckResult:
    """
    Check whether a proposed entry already exists in the catalog.

    The candidate itself must be valid; its URL is never subject to the
    skip policy. Catalog entries with bad URLs follow ``invalid_url_policy``.

    Raises:
        ValueError: If the candidate fails validation (``InvalidUrl`` for
            its URL).
    """
    candidate.validate()
    candidate_url = normalize_url(candidate.url)

    comparable, invalid_urls = _partition_by_url_validity(catalog, invalid_url_policy)
    url_conflicts = [
        entry for entry in comparable if normalize_url(entry.url) == candidate_url
    ]
    title_conflicts = find_title_conflicts(candidate, catalog, threshold)

    result = SubmissionCheckResult(
        candidate=candidate,
        url_conflicts=url_conflicts,
        title_conflicts=title_conflicts,
        invalid_urls=invalid_urls,
    )

    logger.info(
        "Submission checked",
        extra={
            "candidate_id": candidate.id,
            "normalized_url": candidate_url,
            "url_conflicts": [entry.id for entry in url_conflicts],
            "title_conflicts": [match.entries[1].id for match in title_conflicts],
            "is_duplicate": result.is_duplicate,
        },
    )

    return result
