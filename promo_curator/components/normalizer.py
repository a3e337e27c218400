"""
URL and title normalization.

Both functions produce the comparison keys used by the duplicate
detectors. ``normalize_url`` keeps only hostname and path, so URLs that
differ only in scheme, port, query string or fragment compare equal.
"""

import re
import unicodedata
from urllib.parse import urlsplit

from ..utils.error_handling import InvalidUrl

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_WWW_PREFIX = "www."
# Characters a hostname may never contain once userinfo and port are split off
_FORBIDDEN_HOST_CHARS = frozenset("#%/<>?@[\\]^|")


def normalize_url(url: str) -> str:
    """
    Reduce a URL to ``hostname + pathname``.

    The hostname is lowercased and loses one leading ``www.``; trailing
    slashes are stripped from the path and an empty path becomes ``/``.
    ``https://example.com`` and ``https://example.com/`` both give
    ``example.com/`` while ``https://example.com/path/`` gives
    ``example.com/path``.

    Raises:
        InvalidUrl: If ``url`` is not an absolute URL with scheme and host.
    """
    if not isinstance(url, str):
        raise InvalidUrl(url, reason="URL must be a string")

    try:
        parsed = urlsplit(url.strip())
        hostname = parsed.hostname
        # raises for a non-numeric or out-of-range port
        parsed.port
    except ValueError as e:
        raise InvalidUrl(url, reason=str(e)) from e

    if not parsed.scheme or not parsed.netloc or not hostname:
        raise InvalidUrl(url)

    if any(char.isspace() for char in hostname):
        raise InvalidUrl(url, reason="hostname contains whitespace")

    if any(char in _FORBIDDEN_HOST_CHARS for char in hostname):
        raise InvalidUrl(url, reason="hostname contains a forbidden character")

    hostname = hostname.lower()
    if hostname.startswith(_WWW_PREFIX):
        hostname = hostname[len(_WWW_PREFIX):]

    pathname = parsed.path.rstrip("/") or "/"

    return f"{hostname}{pathname}"


def normalize_title(title: str) -> str:
    """
    Reduce a title to lowercase ASCII words separated by single spaces.

    Accented letters are decomposed first, so the base letter survives
    and the combining mark becomes a space like any other punctuation
    ("Résumé" gives "re sume"). Returns an empty string when nothing
    alphanumeric remains.
    """
    text = unicodedata.normalize("NFKD", title.lower())
    text = _NON_ALPHANUMERIC.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()
