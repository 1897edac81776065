"""Parsing helpers for the raw form body and the cookie header."""

import re
from typing import Dict

_PAIR_PATTERN = re.compile(r"([^&=]+)=([^&]*)")


def parse_form_body(body: str) -> Dict[str, str]:
    """Extract ``key=value`` pairs from the first line of a form body.

    Values are returned exactly as submitted; no percent-decoding is applied.
    Fragments without a key or without ``=`` are skipped, and a repeated key
    keeps its last value.

    Example:
        >>> parse_form_body("tx_power=20&=5&tx_gain=")
        {'tx_power': '20', 'tx_gain': ''}
    """
    first_line = body.splitlines()[0] if body else ""
    return {match.group(1): match.group(2) for match in _PAIR_PATTERN.finditer(first_line)}


def get_cookie(cookie_header: str, name: str) -> str:
    """Return the value of cookie ``name`` from a combined cookie header.

    The lookup is a plain substring search: the first occurrence of
    ``name=`` wins and the value runs to the next ``;`` or the end of the
    header. Returns an empty string when the cookie is absent.
    """
    if not cookie_header:
        return ""
    marker = f"{name}="
    pos = cookie_header.find(marker)
    if pos == -1:
        return ""
    start = pos + len(marker)
    end = cookie_header.find(";", start)
    if end == -1:
        return cookie_header[start:]
    return cookie_header[start:end]
