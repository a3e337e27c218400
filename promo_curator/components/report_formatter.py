"""
Report formatting for the promo curator CLI.

Turns validation, submission and expiry results into human-readable text
(and JSON for the expiry list, which automation consumes).
"""

import json
from typing import List, Sequence

from ..models.promo import PromoEntry
from ..models.validation import (
    ExpiredPromo,
    FuzzyTitleMatch,
    SubmissionCheckResult,
    ValidationReport,
)
from ..utils.error_handling import InvalidUrl

VALIDATION_PASSED = (
    "Promo validation passed: no duplicate URLs or fuzzy title matches."
)
NORMALIZATION_NOTE = "Normalize check uses hostname + pathname (no trailing slash)."
ADJUST_ADVICE = "Adjust wording or remove duplicates before submitting."


class ReportFormatter:
    """Formats engine results as plain text."""

    def format_entry(self, entry: PromoEntry) -> str:
        return f"{entry.title} ({entry.id}) -> {entry.url}"

    def format_similarity(self, similarity: float) -> str:
        return f"{similarity:.2f}"

    def _format_match(self, match: FuzzyTitleMatch) -> List[str]:
        left, right = match.entries
        return [
            f"- {left.title} <-> {right.title} "
            f"(score {self.format_similarity(match.similarity)})",
            f"  - {self.format_entry(left)}",
            f"  - {self.format_entry(right)}",
        ]

    def _format_invalid_urls(self, errors: Sequence[InvalidUrl]) -> List[str]:
        lines = ["Entries with invalid URLs were skipped:", ""]
        for error in errors:
            lines.append(f"- {error.entry_id}: {error.url!r} ({error.reason})")
        return lines

    def format_validation_report(
        self, report: ValidationReport, threshold: float
    ) -> str:
        """
        Format a catalog validation report.

        Args:
            report: Result of ``validate_promo_entries``
            threshold: Similarity threshold the report was produced with

        Returns:
            Multi-line report text
        """
        if not report.has_issues:
            return VALIDATION_PASSED

        sections: List[List[str]] = []

        if report.duplicate_urls:
            lines = ["Duplicate promo URLs detected:", ""]
            for group in report.duplicate_urls:
                lines.append(f"- {group.normalized_url}")
                for entry in group.entries:
                    lines.append(f"  - {self.format_entry(entry)}")
            lines.extend(["", NORMALIZATION_NOTE])
            sections.append(lines)

        if report.fuzzy_title_matches:
            lines = [f"Fuzzy title matches detected (similarity >= {threshold}):", ""]
            for match in report.fuzzy_title_matches:
                lines.extend(self._format_match(match))
            lines.extend(["", ADJUST_ADVICE])
            sections.append(lines)

        if report.invalid_urls:
            sections.append(self._format_invalid_urls(report.invalid_urls))

        return "\n\n".join("\n".join(lines) for lines in sections)

    def format_submission_check(
        self, result: SubmissionCheckResult, threshold: float
    ) -> str:
        """Format the outcome of a single-submission check."""
        candidate = result.candidate
        if not result.is_duplicate:
            lines = [f"No duplicates found for {self.format_entry(candidate)}."]
        else:
            lines = [f"Submission {candidate.title!r} duplicates existing promos:"]

            if result.url_conflicts:
                lines.extend(["", "Same URL:"])
                for entry in result.url_conflicts:
                    lines.append(f"  - {self.format_entry(entry)}")

            if result.title_conflicts:
                lines.extend(["", f"Similar titles (similarity >= {threshold}):"])
                for match in result.title_conflicts:
                    existing = match.entries[1]
                    lines.append(
                        f"  - {self.format_entry(existing)} "
                        f"(score {self.format_similarity(match.similarity)})"
                    )

        if result.invalid_urls:
            lines.append("")
            lines.extend(self._format_invalid_urls(result.invalid_urls))

        return "\n".join(lines)

    def format_expired(self, expired: Sequence[ExpiredPromo]) -> str:
        """Format a list of expired promos as text."""
        if not expired:
            return "No expired promos to report."

        lines = ["The following promo entries appear to be past their expiry date:", ""]
        for item in expired:
            lines.append(
                f"- {item.entry.title} ({item.entry.id}) expired on "
                f"{item.expired_on.isoformat()} -> {item.entry.url}"
            )
        return "\n".join(lines)

    def format_expired_json(self, expired: Sequence[ExpiredPromo]) -> str:
        """Format a list of expired promos as a JSON array."""
        return json.dumps([item.to_dict() for item in expired], indent=2)
