"""Unit tests for the expiry checker."""

from datetime import date

import pytest

from promo_curator.components.expiry_checker import (
    find_expired_promos,
    parse_expiry_date,
)


class TestParseExpiryDate:
    """Test parse_expiry_date."""

    def test_ongoing_has_no_date(self, entry_factory):
        """Test that ongoing offers have no expiry."""
        assert parse_expiry_date(entry_factory(expiry_date="Ongoing")) is None

    def test_iso_date(self, entry_factory):
        """Test ISO date parsing."""
        entry = entry_factory(expiry_date="2026-03-31")

        assert parse_expiry_date(entry) == date(2026, 3, 31)

    def test_invalid_date_names_entry(self, entry_factory):
        """Test that bad dates raise ValueError naming the entry."""
        entry = entry_factory(id="bad-date", expiry_date="soon")

        with pytest.raises(ValueError, match="bad-date"):
            parse_expiry_date(entry)

    @pytest.mark.parametrize(
        "value", ["2025-01", "20250101", "2025-01-01T10:00", "2025-02-30"]
    )
    def test_agrees_with_entry_validation(self, entry_factory, value):
        """Test that dates rejected by PromoEntry.validate are rejected here too."""
        entry = entry_factory(id="odd-date", expiry_date=value)

        with pytest.raises(ValueError, match="Expiry date must be"):
            entry.validate()
        with pytest.raises(ValueError, match="odd-date"):
            parse_expiry_date(entry)


class TestFindExpiredPromos:
    """Test find_expired_promos."""

    def test_lists_only_past_dates(self, entry_factory):
        """Test ongoing, past, same-day and future entries."""
        entries = [
            entry_factory(id="ongoing", expiry_date="Ongoing"),
            entry_factory(id="past", expiry_date="2026-01-31"),
            entry_factory(id="today", expiry_date="2026-02-18"),
            entry_factory(id="future", expiry_date="2026-12-31"),
            entry_factory(id="long-past", expiry_date="2025-06-30"),
        ]

        expired = find_expired_promos(entries, today=date(2026, 2, 18))

        assert [item.entry.id for item in expired] == ["past", "long-past"]
        assert expired[0].expired_on == date(2026, 1, 31)

    def test_defaults_to_current_date(self, entry_factory):
        """Test that today defaults to the current date."""
        entries = [
            entry_factory(id="ancient", expiry_date="2000-01-01"),
            entry_factory(id="far-future", expiry_date="2999-01-01"),
        ]

        assert [item.entry.id for item in find_expired_promos(entries)] == ["ancient"]

    def test_empty_catalog(self):
        """Test that an empty catalog has nothing expired."""
        assert find_expired_promos([], today=date(2026, 1, 1)) == []
