# qrsheet/url_validator.py

"""
URL acceptance and normalization.

    is_valid_url(s)  -> bool
    normalize_url(s) -> str

Both are pure and never raise: anything that fails to parse is simply
not a valid URL.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

import validators

from qrsheet.config import ALLOWED_SCHEMES

logger = logging.getLogger("qrsheet.url_validator")

# "scheme:" as long as what follows is not a bare port ("example.com:8080")
SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):(?!\d+(?:[/?#]|$))")

HTTPS_PREFIX = "https://"

PATH_SAFE = "/:@!$&'()*+,;=%~"
QUERY_SAFE = PATH_SAFE + "?"


# ---------------------------------------------------------
# HELPERS
# ---------------------------------------------------------

def _scheme_of(candidate: str) -> Optional[str]:
    match = SCHEME_RE.match(candidate)
    if not match:
        return None
    return match.group(1).lower()


def _encode_tail(candidate: str) -> str:
    """Percent-encode path, query and fragment the way browsers do. The host is left alone."""
    parts = urlsplit(candidate)
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=PATH_SAFE),
        quote(parts.query, safe=QUERY_SAFE),
        quote(parts.fragment, safe=QUERY_SAFE),
    ))


def _parse_attempt(candidate: str) -> Optional[bool]:
    """
    One attempt at reading `candidate` as an absolute URL.

    Returns None when it does not parse at all, otherwise whether the
    parsed URL uses an allowed scheme and is well formed. Single-label
    hosts (localhost, intranet) and underscores in host labels are fine.
    """
    scheme = _scheme_of(candidate)
    if scheme is None:
        return None

    if scheme not in ALLOWED_SCHEMES:
        return False

    try:
        # urlsplit lowercases the scheme, validators is picky about its case
        encoded = _encode_tail(candidate)
        return bool(
            validators.url(encoded, simple_host=True, rfc_2782=True, strict_query=False)
        )
    except Exception:
        logger.debug("validators.url failed on %r", candidate, exc_info=True)
        return None


# ---------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------

def is_valid_url(s: str) -> bool:
    if not s or not s.strip():
        return False

    candidate = s.strip()

    # 1. bare
    scheme = _scheme_of(candidate)
    if scheme is not None and scheme not in ALLOWED_SCHEMES:
        return False
    if _parse_attempt(candidate):
        return True

    # 2. https:// fallback
    return bool(_parse_attempt(HTTPS_PREFIX + candidate))


def normalize_url(s: str) -> str:
    if s.startswith(("http://", "https://")):
        return s
    return HTTPS_PREFIX + s
