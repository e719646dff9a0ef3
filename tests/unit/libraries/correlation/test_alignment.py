"""Unit tests for date alignment across strategies."""

from datetime import datetime

from equitylens.libraries.correlation import AlignmentPolicy, align_returns, group_by_strategy
from equitylens.libraries.performance import EquityCurveEntry


def _entry(strategy: str, day: int, daily_return: float) -> EquityCurveEntry:
    return EquityCurveEntry(
        date=datetime(2024, 2, day),
        daily_return_pct=daily_return,
        account_value=10_000.0,
        strategy_name=strategy,
    )


class TestGroupByStrategy:
    """Test grouping a flat list."""

    def test_groups_and_sorts_each_strategy(self):
        """Entries are grouped by name and sorted by date."""
        entries = [_entry("B", 3, 0.03), _entry("A", 2, 0.02), _entry("B", 1, 0.01), _entry("A", 1, 0.01)]

        groups = group_by_strategy(entries)

        assert set(groups) == {"A", "B"}
        assert [e.date.day for e in groups["A"]] == [1, 2]
        assert [e.date.day for e in groups["B"]] == [1, 3]

    def test_empty(self):
        """No entries, no groups."""
        assert group_by_strategy([]) == {}


class TestAlignReturns:
    """Test common-dates and zero-filled union policies."""

    def _groups(self):
        return {
            "A": [_entry("A", 1, 0.01), _entry("A", 2, 0.02), _entry("A", 4, 0.04)],
            "B": [_entry("B", 2, -0.02), _entry("B", 3, -0.03), _entry("B", 4, -0.04)],
        }

    def test_common_dates_keep_only_shared_dates(self):
        """Intersection axis with matching return vectors."""
        aligned = align_returns(self._groups(), AlignmentPolicy.COMMON_DATES)

        assert [d.day for d in aligned.dates] == [2, 4]
        assert aligned.returns["A"] == [0.02, 0.04]
        assert aligned.returns["B"] == [-0.02, -0.04]

    def test_union_fills_missing_dates_with_zero(self):
        """Union axis with 0 where a strategy did not report."""
        aligned = align_returns(self._groups(), AlignmentPolicy.ZERO_FILLED_UNION)

        assert [d.day for d in aligned.dates] == [1, 2, 3, 4]
        assert aligned.returns["A"] == [0.01, 0.02, 0.0, 0.04]
        assert aligned.returns["B"] == [0.0, -0.02, -0.03, -0.04]

    def test_vectors_match_axis_length(self):
        """Every vector lines up 1:1 with the axis."""
        for policy in AlignmentPolicy:
            aligned = align_returns(self._groups(), policy)
            assert all(len(v) == len(aligned.dates) for v in aligned.returns.values())

    def test_no_strategies(self):
        """No input gives an empty axis."""
        aligned = align_returns({})

        assert aligned.dates == []
        assert aligned.returns == {}

    def test_disjoint_dates_have_empty_common_axis(self):
        """Strategies that never overlap share no dates."""
        groups = {"A": [_entry("A", 1, 0.01)], "B": [_entry("B", 2, 0.02)]}

        aligned = align_returns(groups, AlignmentPolicy.COMMON_DATES)

        assert aligned.dates == []
        assert aligned.returns == {"A": [], "B": []}

    def test_policy_values(self):
        """Policies are addressable by their short names."""
        assert AlignmentPolicy("common") is AlignmentPolicy.COMMON_DATES
        assert AlignmentPolicy("union") is AlignmentPolicy.ZERO_FILLED_UNION
