"""
Fuzzy title matching.

Titles are compared as sets of normalized words using the Dice
coefficient, ``2|A & B| / (|A| + |B|)``. Word order and repeated words do
not affect the score.
"""

from typing import FrozenSet, List, Sequence

from ..models.promo import PromoEntry
from ..models.validation import FuzzyTitleMatch
from .normalizer import normalize_title

DEFAULT_THRESHOLD = 0.9


def tokenize_title(title: str) -> List[str]:
    """Split a title into normalized words; empty titles give no words."""
    normalized = normalize_title(title)
    if not normalized:
        return []
    return normalized.split(" ")


def _token_set(title: str) -> FrozenSet[str]:
    return frozenset(tokenize_title(title))


def _dice(left: FrozenSet[str], right: FrozenSet[str]) -> float:
    # Two titles without any words are treated as identical
    if not left and not right:
        return 1.0
    return 2 * len(left & right) / (len(left) + len(right))


def title_similarity(left: str, right: str) -> float:
    """Return the Dice similarity of two titles' word sets, in [0, 1]."""
    return _dice(_token_set(left), _token_set(right))


def find_fuzzy_title_matches(
    entries: Sequence[PromoEntry], threshold: float = DEFAULT_THRESHOLD
) -> List[FuzzyTitleMatch]:
    """
    Compare every pair of entries and report pairs at or above ``threshold``.

    Pairs are reported individually in input order (``i < j``); matches
    are not merged into clusters, so three mutually similar titles yield
    three matches.
    """
    token_sets = [_token_set(entry.title) for entry in entries]
    matches: List[FuzzyTitleMatch] = []

    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            similarity = _dice(token_sets[i], token_sets[j])
            if similarity >= threshold:
                matches.append(
                    FuzzyTitleMatch(
                        similarity=similarity, entries=(entries[i], entries[j])
                    )
                )

    return matches


def find_title_conflicts(
    candidate: PromoEntry,
    entries: Sequence[PromoEntry],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[FuzzyTitleMatch]:
    """
    Compare one candidate title against every entry.

    Each match pairs ``(candidate, entry)``, in the order of ``entries``.
    """
    candidate_tokens = _token_set(candidate.title)
    matches: List[FuzzyTitleMatch] = []

    for entry in entries:
        similarity = _dice(candidate_tokens, _token_set(entry.title))
        if similarity >= threshold:
            matches.append(
                FuzzyTitleMatch(similarity=similarity, entries=(candidate, entry))
            )

    return matches
