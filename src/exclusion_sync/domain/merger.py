"""ExclusionMerger: folds newly blocked placements into a campaign's exclusion list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .normalizer import normalize_domain

# Direct rejects campaigns with more excluded sites than this.
PLATFORM_MAX_EXCLUDED_SITES = 1000


class CapPolicy(str, Enum):
    """Which side of the merge is inserted first, and so survives the cap."""

    existing_first = "existing_first"   # current exclusions are never evicted
    blocked_first = "blocked_first"     # fresh report hits displace old entries


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a merge: the list to send and whether sending is needed."""

    final_sites: list[str]
    changed: bool
    added: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)


class ExclusionMerger:
    """Normalize, deduplicate and cap an exclusion list."""

    def __init__(
        self,
        max_sites: int = PLATFORM_MAX_EXCLUDED_SITES,
        cap_policy: CapPolicy = CapPolicy.existing_first,
    ) -> None:
        if max_sites < 1:
            raise ValueError(f"max_sites must be >= 1, got {max_sites}")
        self._max_sites = max_sites
        self._cap_policy = CapPolicy(cap_policy)

    @property
    def max_sites(self) -> int:
        return self._max_sites

    def merge(
        self,
        current_exclusions: Iterable[str],
        newly_blocked: Iterable[str],
    ) -> MergeResult:
        """Merge *newly_blocked* into *current_exclusions*.

        Entries keep first-seen order. When the union is larger than
        ``max_sites`` the tail is cut; with ``existing_first`` that tail is
        made of newly blocked sites only (as long as the current list itself
        fits). ``changed`` is False when the final list holds exactly the
        normalized current domains, so no update needs to be issued.
        """
        current = _dedupe(normalize_domain(s) for s in current_exclusions)
        blocked = _dedupe(normalize_domain(s) for s in newly_blocked)

        if self._cap_policy is CapPolicy.existing_first:
            union = _dedupe([*current, *blocked])
        else:
            union = _dedupe([*blocked, *current])

        final_sites = union[: self._max_sites]
        dropped = union[self._max_sites :]

        current_set = set(current)
        added = [s for s in final_sites if s not in current_set]
        changed = set(final_sites) != current_set
        return MergeResult(final_sites=final_sites, changed=changed, added=added, dropped=dropped)


def _dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence."""
    return list(dict.fromkeys(items))
