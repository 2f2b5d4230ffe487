"""ExclusionMerger tests: dedup, cap and no-op detection."""

import pytest

from exclusion_sync.domain.merger import (
    PLATFORM_MAX_EXCLUDED_SITES,
    CapPolicy,
    ExclusionMerger,
)


def _sites(prefix: str, count: int) -> list[str]:
    return [f"{prefix}{i}.com" for i in range(count)]


class TestMergeExamples:
    """Worked examples."""

    def test_new_domain_marks_changed(self):
        result = ExclusionMerger().merge(["http://old.com/"], ["OLD.com", "new-bad.ru"])
        assert set(result.final_sites) == {"old.com", "new-bad.ru"}
        assert result.changed is True
        assert result.added == ["new-bad.ru"]

    def test_same_domain_in_other_form_is_noop(self):
        result = ExclusionMerger().merge(["old.com"], ["http://old.com/"])
        assert result.final_sites == ["old.com"]
        assert result.changed is False
        assert result.added == []


class TestMergeNoOp:
    """No update when nothing new would be excluded."""

    def test_empty_newly_blocked(self):
        result = ExclusionMerger().merge(["a.com", "https://www.b.com/"], [])
        assert result.changed is False
        assert result.final_sites == ["a.com", "b.com"]

    def test_duplicates_in_current_do_not_force_update(self):
        result = ExclusionMerger().merge(["a.com", "A.com", "http://a.com"], ["a.com"])
        assert result.changed is False
        assert result.final_sites == ["a.com"]

    def test_both_empty(self):
        result = ExclusionMerger().merge([], [])
        assert result.final_sites == []
        assert result.changed is False

    def test_rerun_is_deterministic(self):
        merger = ExclusionMerger()
        first = merger.merge(["x.com", "y.com"], ["b.ru", "a.ru"])
        second = merger.merge(["x.com", "y.com"], ["b.ru", "a.ru"])
        assert first == second
        # Feeding the result back in is a no-op.
        assert merger.merge(first.final_sites, ["b.ru", "a.ru"]).changed is False


class TestMergeOrder:
    """First-seen order, current entries before new ones."""

    def test_insertion_order(self):
        result = ExclusionMerger().merge(["c.com", "a.com"], ["b.com", "a.com"])
        assert result.final_sites == ["c.com", "a.com", "b.com"]

    def test_membership_independent_of_input_order(self):
        merger = ExclusionMerger()
        one = merger.merge(["a.com", "b.com"], ["c.com", "d.com"])
        two = merger.merge(["b.com", "a.com"], ["d.com", "c.com"])
        assert set(one.final_sites) == set(two.final_sites)
        assert one.changed == two.changed


class TestMergeCap:
    """Never more than max_sites; existing entries survive the cut."""

    def test_default_cap_is_platform_limit(self):
        assert ExclusionMerger().max_sites == PLATFORM_MAX_EXCLUDED_SITES == 1000

    def test_new_sites_dropped_first(self):
        current = _sites("old", 998)
        new = _sites("new", 5)
        result = ExclusionMerger().merge(current, new)
        assert len(result.final_sites) == 1000
        assert result.final_sites[:998] == current
        assert result.final_sites[998:] == ["new0.com", "new1.com"]
        assert result.dropped == ["new2.com", "new3.com", "new4.com"]
        assert result.changed is True

    def test_full_list_blocks_additions(self):
        current = _sites("old", 1000)
        result = ExclusionMerger().merge(current, ["fresh.ru"])
        assert result.final_sites == current
        assert result.dropped == ["fresh.ru"]
        assert result.changed is False

    def test_oversized_current_is_truncated(self):
        current = _sites("old", 1005)
        result = ExclusionMerger().merge(current, [])
        assert result.final_sites == current[:1000]
        assert result.changed is True

    def test_custom_cap(self):
        result = ExclusionMerger(max_sites=3).merge(["a.com", "b.com"], ["c.com", "d.com"])
        assert result.final_sites == ["a.com", "b.com", "c.com"]
        assert result.dropped == ["d.com"]

    def test_blocked_first_policy(self):
        merger = ExclusionMerger(max_sites=3, cap_policy=CapPolicy.blocked_first)
        result = merger.merge(["a.com", "b.com", "c.com"], ["x.com"])
        assert result.final_sites == ["x.com", "a.com", "b.com"]
        assert result.dropped == ["c.com"]
        assert result.changed is True

    def test_cap_policy_accepts_string(self):
        merger = ExclusionMerger(max_sites=1, cap_policy="blocked_first")
        assert merger.merge(["a.com"], ["b.com"]).final_sites == ["b.com"]

    def test_invalid_cap_rejected(self):
        with pytest.raises(ValueError):
            ExclusionMerger(max_sites=0)
