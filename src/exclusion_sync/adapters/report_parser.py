"""Parse Direct TSV placement reports into a list of sites."""

from __future__ import annotations

_TOTAL_PREFIX = "Total"
_PLACEHOLDERS = frozenset({"", "--"})


def parse_placement_report(text: str) -> list[str]:
    """Return distinct placements from a TSV report, in report order.

    The first line is the column header. Blank lines, the trailing
    ``Total rows: N`` summary and ``--`` placeholders are skipped; only the
    first column is read.
    """
    sites: dict[str, None] = {}
    for line in text.splitlines()[1:]:
        if not line.strip():
            continue
        first = line.split("\t", 1)[0]
        if first.startswith(_TOTAL_PREFIX):
            continue
        site = first.strip()
        if site in _PLACEHOLDERS:
            continue
        sites.setdefault(site, None)
    return list(sites)
