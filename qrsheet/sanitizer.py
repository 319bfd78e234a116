# qrsheet/sanitizer.py

"""
Display sanitization and suspicious-pattern advisories for URLs.

Advisories are heuristics shown next to a QR code. They never block a
batch and are not a security boundary.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from qrsheet.config import LONG_URL_THRESHOLD, MAX_DISPLAY_LENGTH

logger = logging.getLogger("qrsheet.sanitizer")

DISPLAY_PLACEHOLDER = "[URL cannot be displayed]"


# ---------------------------------------------------------
# DISPLAY SANITIZATION
# ---------------------------------------------------------

SCRIPT_TAG_RE = re.compile(r"<script\b.*?</script\s*>", re.IGNORECASE | re.DOTALL)
ANY_TAG_RE = re.compile(r"<[^>]*>")
DANGEROUS_SCHEME_RE = re.compile(r"(?:javascript|data|vbscript):", re.IGNORECASE)


def sanitize_for_display(s: str) -> str:
    """Return a copy of `s` that is safe to show as text. Never the QR payload."""
    try:
        cleaned = SCRIPT_TAG_RE.sub("", s)
        cleaned = ANY_TAG_RE.sub("", cleaned)
        cleaned = DANGEROUS_SCHEME_RE.sub("", cleaned)
        return cleaned[:MAX_DISPLAY_LENGTH]
    except Exception:
        logger.warning("display sanitization failed", exc_info=True)
        return DISPLAY_PLACEHOLDER


# ---------------------------------------------------------
# SUSPICION ADVISORY
# ---------------------------------------------------------

@dataclass(frozen=True)
class Advisory:
    has_warning: bool
    message: Optional[str] = None


NO_WARNING = Advisory(has_warning=False)

# Order is priority: first match wins.
SUSPICIOUS_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"javascript:", re.IGNORECASE), "JavaScript URLs are not allowed"),
    (re.compile(r"data:", re.IGNORECASE), "Data URLs are not allowed"),
    (re.compile(r"file:", re.IGNORECASE), "File URLs are not allowed"),
    (re.compile(r"vbscript:", re.IGNORECASE), "VBScript URLs are not allowed"),
    (re.compile(r"<script", re.IGNORECASE), "Script tags detected in URL"),
    (re.compile(r"\.\.[/\\]"), "Path traversal detected"),
]

IPV4_HOST_RE = re.compile(r"^(?:\d{1,3}\.){3}\d{1,3}$")

IP_ADDRESS_WARNING = "Warning: IP address detected (verify source)"
LONG_URL_WARNING = "Warning: Unusually long URL"


def _hostname_of(candidate: str) -> Optional[str]:
    try:
        parts = urlsplit(candidate)
        if not parts.scheme or not parts.netloc:
            return None
        return parts.hostname
    except ValueError:
        return None


def _parse_hostname(s: str) -> Optional[str]:
    host = _hostname_of(s)
    if host or "://" in s:
        return host
    # bare host/path: retry as https
    return _hostname_of("https://" + s)


def check_suspicious(s: str) -> Advisory:
    try:
        for pattern, message in SUSPICIOUS_PATTERNS:
            if pattern.search(s):
                return Advisory(has_warning=True, message=message)

        host = _parse_hostname(s)
        if host is None:
            return NO_WARNING

        if IPV4_HOST_RE.match(host):
            return Advisory(has_warning=True, message=IP_ADDRESS_WARNING)

        if len(s) > LONG_URL_THRESHOLD:
            return Advisory(has_warning=True, message=LONG_URL_WARNING)

        return NO_WARNING
    except Exception:
        logger.warning("suspicion check failed", exc_info=True)
        return NO_WARNING
