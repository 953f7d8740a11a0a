"""
Canonical Request Construction
==============================
Builds the exact string Duo signs for version 2 request signatures.

Duo recomputes the canonical string from the decoded request on its side,
so the ordering and escaping here must match byte for byte.
"""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import List, Mapping, Tuple
from urllib.parse import quote_plus, urlencode

from duo_authapi.http.exceptions import EncodingError

from .models import CanonicalRequest


def format_date(now: datetime) -> str:
    """
    Format a timestamp as RFC 2822, e.g. ``Tue, 21 Aug 2012 17:29:18 +0000``.

    Naive datetimes are taken to be UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now)


def encode_component(text: str) -> str:
    """Form-encode a name or value, then apply Duo's three substitutions."""
    if not isinstance(text, str):
        raise EncodingError(f"Parameter must be a string, got {type(text).__name__}")
    try:
        encoded = quote_plus(text, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Parameter is not representable in UTF-8: {e}")
    return encoded.replace("+", "%20").replace("*", "%2A").replace("%7E", "~")


def sorted_params(params: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Parameters ordered by the UTF-8 bytes of their names."""
    keyed = []
    for name, value in params.items():
        if not isinstance(name, str):
            raise EncodingError(f"Parameter name must be a string, got {type(name).__name__}")
        try:
            keyed.append((name.encode("utf-8"), name, value))
        except UnicodeEncodeError as e:
            raise EncodingError(f"Parameter name is not representable in UTF-8: {e}")
    keyed.sort(key=lambda item: item[0])
    return [(name, value) for _, name, value in keyed]


def canonical_query_string(params: Mapping[str, str]) -> str:
    """
    Build the canonical query string.

    Args:
        params: Request parameters (names are unique)

    Returns:
        ``a=1&b=2`` style string, or ``""`` for no parameters
    """
    return "&".join(
        f"{encode_component(name)}={encode_component(value)}"
        for name, value in sorted_params(params)
    )


def encode_form_body(params: Mapping[str, str]) -> str:
    """Standard ``application/x-www-form-urlencoded`` body, in signing order."""
    pairs = sorted_params(params)
    for _, value in pairs:
        if not isinstance(value, str):
            raise EncodingError(f"Parameter must be a string, got {type(value).__name__}")
    try:
        return urlencode(pairs, encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Parameter is not representable in UTF-8: {e}")


def canonicalize(
    method: str,
    host: str,
    path: str,
    params: Mapping[str, str],
    now: datetime,
) -> CanonicalRequest:
    """Assemble the canonical request for one call."""
    return CanonicalRequest(
        date=format_date(now),
        method=method.upper(),
        host=host.lower(),
        path=path,
        query=canonical_query_string(params),
    )
