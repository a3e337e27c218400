"""Detection of catalog entries whose offer has expired."""

from datetime import date
from typing import List, Optional, Sequence

from ..models.promo import PromoEntry, parse_expiry_date_value
from ..models.validation import ExpiredPromo


def parse_expiry_date(entry: PromoEntry) -> Optional[date]:
    """
    Parse an entry's expiry date.

    Returns:
        The expiry date, or None for ongoing offers

    Raises:
        ValueError: If the date is not a YYYY-MM-DD date.
    """
    if entry.is_ongoing:
        return None

    try:
        return parse_expiry_date_value(entry.expiry_date)
    except ValueError as e:
        raise ValueError(
            f"Entry {entry.id!r} has invalid expiry date {entry.expiry_date!r}: {e}"
        ) from e


def find_expired_promos(
    entries: Sequence[PromoEntry], today: Optional[date] = None
) -> List[ExpiredPromo]:
    """
    List entries whose expiry date is before ``today``.

    An offer is still live on its expiry day. ``today`` defaults to the
    current local date.
    """
    today = today or date.today()
    expired: List[ExpiredPromo] = []

    for entry in entries:
        expiry = parse_expiry_date(entry)
        if expiry is not None and expiry < today:
            expired.append(ExpiredPromo(entry=entry, expired_on=expiry))

    return expired
