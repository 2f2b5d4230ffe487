"""Canonical domain keys for placement comparison."""

from __future__ import annotations

_SCHEME_PREFIXES = ("http://", "https://")
_WWW_PREFIX = "www."


def _strip_once(value: str) -> str:
    cleaned = value.strip().lower()
    for prefix in _SCHEME_PREFIXES:
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
            break
    if cleaned.startswith(_WWW_PREFIX):
        cleaned = cleaned[len(_WWW_PREFIX):]
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned


def normalize_domain(raw: str) -> str:
    """Lower-case *raw* and drop a leading scheme, a leading ``www.`` and a trailing slash.

    Only leading/trailing occurrences are touched; ``http://`` inside the
    string is kept. The single-strip pass is repeated until it no longer
    changes the value so that ``normalize_domain`` is idempotent even for
    inputs like ``"https://www.http://x.com//"``.
    """
    current = raw
    while True:
        cleaned = _strip_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned
