"""Combine several blocks into one super block.

Every component is normalized to an equity curve, the component date lists
are aligned under the requested strategy, and the combined curve is walked
forward summing each component's real or forward-filled account value.
Statistics are computed for the combined curve and for every component on
its own normalized series.
"""

from datetime import datetime
from typing import Any, Sequence

from pydantic import TypeAdapter

from equitylens.errors import SuperBlockAlignmentError
from equitylens.libraries.performance.metrics import TRADING_DAYS_PER_YEAR
from equitylens.libraries.performance.models import EquityCurveEntry, PortfolioStats
from equitylens.libraries.performance.statistics import compute_stats
from equitylens.services.superblock.conversion import component_to_equity_curve
from equitylens.services.superblock.models import (
    CombinedEquityCurvePoint,
    DateAlignmentStrategy,
    DateRange,
    SuperBlockComponent,
    SuperBlockData,
)
from equitylens.system import LoggerFactory

logger = LoggerFactory.get_logger()

COMBINED_STRATEGY_NAME = "Combined"

_COMPONENTS_ADAPTER: TypeAdapter[list[SuperBlockComponent]] = TypeAdapter(list[SuperBlockComponent])

_FAILURE_REASONS = {
    DateAlignmentStrategy.INTERSECTION: "no-overlap",
    DateAlignmentStrategy.UNION: "no-overlap",
    DateAlignmentStrategy.EARLIEST_COMMON: "no-common-start",
    DateAlignmentStrategy.LATEST_COMMON: "no-common-end",
}


def parse_components(raw: Sequence[dict[str, Any]]) -> list[SuperBlockComponent]:
    """Validate plain dicts into components, dispatching on `block_type`."""
    return _COMPONENTS_ADAPTER.validate_python(list(raw))


def align_component_dates(
    dates_by_component: dict[str, list[datetime]],
    strategy: DateAlignmentStrategy | str,
) -> tuple[list[datetime], list[str]]:
    """
    Build the combined date axis from per-component date lists.

    Args:
        dates_by_component: Component name -> its observation dates
        strategy: Alignment strategy

    Returns:
        (aligned dates ascending, warnings). Failing to find common dates is
        reported as a warning with an empty axis, never raised here.
    """
    strategy = DateAlignmentStrategy(strategy)
    warnings: list[str] = []

    if not dates_by_component:
        return [], ["No components to align"]

    date_sets = [set(dates) for dates in dates_by_component.values()]
    all_dates = sorted(set().union(*date_sets))
    common = [d for d in all_dates if all(d in dates for dates in date_sets)]

    if strategy == DateAlignmentStrategy.INTERSECTION:
        if not common:
            warnings.append("No overlapping dates found across all components")
        elif len(common) < len(all_dates) / 2:
            warnings.append(f"Limited date overlap: {len(common)} of {len(all_dates)} total dates")
        return common, warnings

    if strategy == DateAlignmentStrategy.UNION:
        warnings.append("Using forward-fill for missing dates in some components")
        return all_dates, warnings

    if strategy == DateAlignmentStrategy.EARLIEST_COMMON:
        if not common:
            return [], ["No common start date found"]
        return [d for d in all_dates if d >= common[0]], warnings

    if not common:
        return [], ["No common end date found"]
    return [d for d in all_dates if d <= common[-1]], warnings


def _unique_name(name: str, block_id: str, taken: dict[str, Any]) -> str:
    if name not in taken:
        return name
    candidate = f"{name} ({block_id})"
    counter = 2
    while candidate in taken:
        candidate = f"{name} ({block_id}) #{counter}"
        counter += 1
    return candidate


def combine_super_block(
    components: Sequence[SuperBlockComponent],
    alignment: DateAlignmentStrategy | str = DateAlignmentStrategy.INTERSECTION,
    risk_free_rate: float = 2.0,
    initial_capital_fallback: float = 10_000.0,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> SuperBlockData:
    """
    Merge component blocks into one combined equity curve.

    Components sharing a name are kept apart as `name (block_id)`, then
    `name (block_id) #2` and so on.

    Args:
        components: Equity-curve or trade-based components
        alignment: Date alignment strategy
        risk_free_rate: Annual risk-free rate in percent for all statistics
        initial_capital_fallback: Initial capital when a series cannot supply one
        periods_per_year: Annualization factor for all statistics

    Returns:
        SuperBlockData with combined and per-component statistics

    Raises:
        SuperBlockAlignmentError: The aligned axis is empty, or no date on it
            is ever covered by every component
        ValueError: Unknown alignment name
    """
    alignment = DateAlignmentStrategy(alignment)
    warnings: list[str] = []

    curves: dict[str, list[EquityCurveEntry]] = {}
    for component in components:
        entries = component_to_equity_curve(component)
        if not entries:
            message = f"Component '{component.block_name}' has no equity data and was skipped"
            warnings.append(message)
            logger.warning(
                "superblock.component_skipped",
                block_id=component.block_id,
                block_name=component.block_name,
            )
            continue
        curves[_unique_name(component.block_name, component.block_id, curves)] = entries

    if not curves:
        logger.error("superblock.no_components", requested=len(components))
        raise SuperBlockAlignmentError(
            "No components with equity data - cannot combine blocks",
            reason="no-components",
            warnings=warnings,
        )

    dates_by_component = {name: [e.date for e in entries] for name, entries in curves.items()}
    aligned_dates, alignment_warnings = align_component_dates(dates_by_component, alignment)
    warnings.extend(alignment_warnings)
    for warning in alignment_warnings:
        logger.warning("superblock.alignment_warning", alignment=alignment.value, warning=warning)

    if not aligned_dates:
        reason = _FAILURE_REASONS[alignment]
        logger.error("superblock.alignment_failed", alignment=alignment.value, reason=reason)
        raise SuperBlockAlignmentError(
            f"No aligned dates found ({reason}) - cannot combine blocks",
            reason=reason,
            warnings=warnings,
        )

    logger.debug("superblock.aligned", alignment=alignment.value, dates=len(aligned_dates), components=len(curves))

    combined = _walk_forward(curves, aligned_dates)
    if not combined:
        logger.error("superblock.alignment_failed", alignment=alignment.value, reason="no-complete-date")
        raise SuperBlockAlignmentError(
            "No date is covered by every component - cannot combine blocks",
            reason="no-complete-date",
            warnings=warnings,
        )

    combined_entries = [
        EquityCurveEntry(
            date=point.date,
            daily_return_pct=point.combined_return,
            account_value=point.combined_account_value,
            margin_req=point.combined_margin_req,
            strategy_name=COMBINED_STRATEGY_NAME,
        )
        for point in combined
    ]

    def stats_for(entries: Sequence[EquityCurveEntry]) -> PortfolioStats:
        return compute_stats(
            entries,
            risk_free_rate=risk_free_rate,
            initial_capital_fallback=initial_capital_fallback,
            periods_per_year=periods_per_year,
        )

    result = SuperBlockData(
        combined_equity_curve=combined,
        portfolio_stats=stats_for(combined_entries),
        component_stats={name: stats_for(entries) for name, entries in curves.items()},
        date_range=DateRange(start=combined[0].date, end=combined[-1].date),
        alignment_warnings=warnings,
    )

    logger.info(
        "superblock.combined",
        components=len(curves),
        points=len(combined),
        alignment=alignment.value,
        warnings=len(warnings),
    )
    return result


def _walk_forward(
    curves: dict[str, list[EquityCurveEntry]],
    aligned_dates: list[datetime],
) -> list[CombinedEquityCurvePoint]:
    """
    Sum component values date by date, forward-filling gaps.

    Nothing is emitted before the first date at which every component has a
    real or previously seen value.
    """
    by_date = {name: {entry.date: entry for entry in entries} for name, entries in curves.items()}
    last_known: dict[str, EquityCurveEntry] = {}
    combined: list[CombinedEquityCurvePoint] = []

    for date in aligned_dates:
        for name, entries in by_date.items():
            entry = entries.get(date)
            if entry is not None:
                last_known[name] = entry

        if len(last_known) < len(curves):
            continue

        component_values = {name: last_known[name].account_value for name in curves}
        combined_value = sum(component_values.values())
        combined_margin = sum(last_known[name].margin_req for name in curves) / len(curves)

        previous_value = combined[-1].combined_account_value if combined else 0.0
        combined_return = (combined_value - previous_value) / previous_value if previous_value != 0 else 0.0

        combined.append(
            CombinedEquityCurvePoint(
                date=date,
                combined_account_value=combined_value,
                component_values=component_values,
                combined_return=combined_return,
                combined_margin_req=combined_margin,
            )
        )

    return combined
