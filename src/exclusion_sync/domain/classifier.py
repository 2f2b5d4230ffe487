"""SiteClassifier: decides which reported placements get excluded."""

from __future__ import annotations

import logging
from collections.abc import Iterable

_LOGGER = logging.getLogger("exclusion_sync.classifier")


class SiteClassifier:
    """Match placements against blacklist substrings and a whitelist.

    Whitelist entries are exact (case-insensitive) and always win. Blacklist
    words match as case-insensitive substrings anywhere in the placement.
    """

    def classify(
        self,
        report_sites: Iterable[str],
        blacklist_words: Iterable[str],
        whitelist_words: Iterable[str],
    ) -> set[str]:
        """Return the report sites to block, verbatim (not normalized)."""
        words = _prepare_blacklist(blacklist_words)
        if not words:
            return set()
        whitelist = _prepare_whitelist(whitelist_words)

        blocked: set[str] = set()
        for site in report_sites:
            if site.lower() in whitelist:
                _LOGGER.debug("site_whitelisted", extra={"site": site})
                continue
            if self._matching_word(site, words) is not None:
                blocked.add(site)
        return blocked

    def reason(
        self,
        site: str,
        blacklist_words: Iterable[str],
        whitelist_words: Iterable[str],
    ) -> str:
        """Return audit reason for this site: 'whitelisted', 'blocked: <word>' or 'allowed'."""
        if site.lower() in _prepare_whitelist(whitelist_words):
            return "whitelisted"
        word = self._matching_word(site, _prepare_blacklist(blacklist_words))
        if word is not None:
            return f"blocked: {word}"
        return "allowed"

    def _matching_word(self, site: str, words: list[str]) -> str | None:
        """First blacklist word contained in site, or None."""
        site_lower = site.lower()
        for word in words:
            if word in site_lower:
                return word
        return None


def _prepare_whitelist(words: Iterable[str]) -> set[str]:
    return {w.lower() for w in words}


def _prepare_blacklist(words: Iterable[str]) -> list[str]:
    # A blank word is a substring of everything; never let it block the report.
    return [w.lower() for w in words if w.strip()]
