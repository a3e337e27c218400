"""
Promo entry data models.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

ONGOING = "Ongoing"

_EXPIRY_DATE_FORMAT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_expiry_date_value(value: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` expiry date.

    Other ISO 8601 forms such as ``2025-01`` or ``20250101`` are rejected.

    Raises:
        ValueError: If ``value`` is not a calendar date in that form.
    """
    if not isinstance(value, str) or not _EXPIRY_DATE_FORMAT.fullmatch(value):
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return date_parser.isoparse(value).date()


class PromoCategory(Enum):
    """Categories a promo can be listed under."""

    MODELS = "Models"
    DESIGN = "Design"
    HOSTING = "Hosting"
    PRODUCTIVITY = "Productivity"
    DEVELOPER_TOOLS = "Developer Tools"
    ANALYTICS = "Analytics"
    EDUCATION = "Education"
    INFRASTRUCTURE = "Infrastructure"
    DATA = "Data"
    SECURITY = "Security"
    OPEN_SOURCE = "Open Source"
    STARTUP_PROGRAMS = "Startup Programs"


class PromoTag(Enum):
    """Tags describing the kind of offer."""

    FREE_TIER = "free-tier"
    CREDITS = "credits"
    TRIAL = "trial"
    STARTUP_ONLY = "startup-only"
    STUDENT = "student"
    OPEN_SOURCE = "open-source"


# camelCase keys used by the web catalog, accepted on load
_KEY_ALIASES = {
    "expiryDate": "expiry_date",
    "addedDate": "added_date",
    "sourceUrl": "source_url",
    "submittedBy": "submitted_by",
    "verifiedAt": "verified_at",
}

_REQUIRED_KEYS = ("id", "title", "url")


@dataclass
class PromoEntry:
    """A single catalog entry.

    Only ``id``, ``title`` and ``url`` are read by the validation engine;
    the remaining fields are descriptive and passed through untouched.
    """

    id: str
    title: str
    url: str
    description: str = ""
    category: Optional[PromoCategory] = None
    tags: List[PromoTag] = field(default_factory=list)
    expiry_date: str = ONGOING
    added_date: Optional[str] = None
    source: str = ""
    source_url: Optional[str] = None
    submitted_by: Optional[str] = None
    verified_at: Optional[str] = None

    @property
    def is_ongoing(self) -> bool:
        return self.expiry_date == ONGOING

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PromoEntry":
        """
        Build an entry from a mapping loaded from a catalog file.

        Raises:
            ValueError: If a required key is missing or a category/tag is unknown.
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            values[_KEY_ALIASES.get(key, key)] = value

        missing = [key for key in _REQUIRED_KEYS if values.get(key) is None]
        if missing:
            raise ValueError(f"Promo entry missing required keys: {', '.join(missing)}")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Promo entry has unknown keys: {', '.join(unknown)}")

        category = values.get("category")
        if category is not None:
            try:
                values["category"] = PromoCategory(category)
            except ValueError:
                raise ValueError(f"Unknown promo category: {category!r}") from None

        tags = values.get("tags") or []
        if not isinstance(tags, list):
            raise ValueError("Promo tags must be a list")
        parsed_tags = []
        for tag in tags:
            try:
                parsed_tags.append(PromoTag(tag))
            except ValueError:
                raise ValueError(f"Unknown promo tag: {tag!r}") from None
        values["tags"] = parsed_tags

        if values.get("expiry_date") is None:
            values["expiry_date"] = ONGOING

        for key in ("id", "title", "url", "expiry_date", "added_date", "verified_at"):
            # YAML turns bare dates and numbers into non-string scalars
            if values.get(key) is not None and not isinstance(values[key], str):
                values[key] = (
                    values[key].isoformat()
                    if isinstance(values[key], date)
                    else str(values[key])
                )

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the entry back to plain catalog values."""
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "category": self.category.value if self.category else None,
            "tags": [tag.value for tag in self.tags],
            "expiry_date": self.expiry_date,
            "added_date": self.added_date,
            "source": self.source,
            "source_url": self.source_url,
            "submitted_by": self.submitted_by,
            "verified_at": self.verified_at,
        }

    def validate(self) -> bool:
        """Validate the entry's own fields."""
        # Imported here to keep models free of a components import cycle
        from ..components.normalizer import normalize_url

        if not self.id or not self.id.strip():
            raise ValueError("Promo ID cannot be empty")

        if not self.title or not self.title.strip():
            raise ValueError("Promo title cannot be empty")

        if not self.url or not self.url.strip():
            raise ValueError("Promo URL cannot be empty")

        normalize_url(self.url)

        if self.source_url:
            normalize_url(self.source_url)

        if len(self.title) > 500:
            raise ValueError("Promo title too long (max 500 characters)")

        if len(self.description) > 5000:
            raise ValueError("Promo description too long (max 5000 characters)")

        if self.category is not None and not isinstance(self.category, PromoCategory):
            raise ValueError("category must be a PromoCategory enum")

        if not all(isinstance(tag, PromoTag) for tag in self.tags):
            raise ValueError("tags must be PromoTag enums")

        if not self.is_ongoing:
            try:
                parse_expiry_date_value(self.expiry_date)
            except ValueError:
                raise ValueError(
                    f"Expiry date must be '{ONGOING}' or an ISO date: {self.expiry_date!r}"
                ) from None

        return True
