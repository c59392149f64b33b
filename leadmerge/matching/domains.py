"""Domain extraction and fuzzy company-name matching."""

import re
from typing import Optional
from urllib.parse import urlparse

from Levenshtein import distance

_HOST_RE = re.compile(r"^[\w-]+(?:\.[\w-]+)+$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def extract_domain(url_or_email: Optional[str]) -> Optional[str]:
    """Extract a lower-cased domain from a URL or an email address.

    Examples:
        John@Example.COM -> example.com
        https://www.Acme.io/about -> acme.io
        acme.io -> acme.io
        not a url -> None
    """
    if not url_or_email or not isinstance(url_or_email, str):
        return None

    value = url_or_email.strip()

    if "@" in value:
        domain = value.split("@")[1].strip().lower()
        return domain or None

    if "://" not in value:
        value = f"https://{value}"

    try:
        host = urlparse(value).hostname
    except ValueError:
        return None

    if not host:
        return None

    host = host.lower()
    if host.startswith("www."):
        host = host[4:]

    if not _HOST_RE.match(host):
        return None
    return host


def normalize_name(name: Optional[str]) -> str:
    """Lower-case a name and drop everything that is not a letter or digit."""
    if not name:
        return ""
    return _NON_ALNUM_RE.sub("", str(name).lower())


def name_similarity(name_a: Optional[str], name_b: Optional[str]) -> float:
    """Return 1 - levenshtein / longest length over the normalized names."""
    a = normalize_name(name_a)
    b = normalize_name(name_b)
    if not a or not b:
        return 0.0
    return 1 - distance(a, b) / max(len(a), len(b))


def fuzzy_match(name_a: Optional[str], name_b: Optional[str], threshold: float = 0.8) -> bool:
    """Check whether two company names are close enough to be the same business."""
    if not normalize_name(name_a) or not normalize_name(name_b):
        return False
    return name_similarity(name_a, name_b) >= threshold
