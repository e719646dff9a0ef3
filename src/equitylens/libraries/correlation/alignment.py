"""Put several strategies' daily returns on one shared date axis.

Dates are compared exactly as given. Callers whose sources carry different
time-of-day components must normalize them before aligning.
"""

from datetime import datetime
from typing import Mapping, Sequence

from equitylens.libraries.correlation.models import AlignedReturns, AlignmentPolicy
from equitylens.libraries.performance.models import EquityCurveEntry


def group_by_strategy(entries: Sequence[EquityCurveEntry]) -> dict[str, list[EquityCurveEntry]]:
    """
    Group a flat entry list by `strategy_name`.

    Each group is sorted ascending by date; entries sharing a date keep their
    input order.
    """
    groups: dict[str, list[EquityCurveEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.strategy_name, []).append(entry)
    return {name: sorted(group, key=lambda e: e.date) for name, group in groups.items()}


def align_returns(
    entries_by_strategy: Mapping[str, Sequence[EquityCurveEntry]],
    policy: AlignmentPolicy = AlignmentPolicy.COMMON_DATES,
) -> AlignedReturns:
    """
    Build the shared date axis and per-strategy return vectors.

    Args:
        entries_by_strategy: Strategy name -> its entries
        policy: COMMON_DATES (intersection) or ZERO_FILLED_UNION

    Returns:
        AlignedReturns with dates ascending. With no strategies the axis is
        empty.
    """
    returns_by_date: dict[str, dict[datetime, float]] = {}
    for name, entries in entries_by_strategy.items():
        by_date: dict[datetime, float] = {}
        for entry in sorted(entries, key=lambda e: e.date):
            by_date[entry.date] = entry.daily_return_pct
        returns_by_date[name] = by_date

    if not returns_by_date:
        return AlignedReturns()

    all_dates: set[datetime] = set()
    for by_date in returns_by_date.values():
        all_dates.update(by_date)

    if policy == AlignmentPolicy.COMMON_DATES:
        axis = sorted(d for d in all_dates if all(d in by_date for by_date in returns_by_date.values()))
    else:
        axis = sorted(all_dates)

    return AlignedReturns(
        dates=axis,
        returns={name: [by_date.get(d, 0.0) for d in axis] for name, by_date in returns_by_date.items()},
    )
