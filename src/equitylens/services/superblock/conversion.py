"""Normalize super-block components to equity-curve entries."""

from typing import Sequence

from equitylens.libraries.performance.models import EquityCurveEntry
from equitylens.services.superblock.models import (
    DailyLogEntry,
    EquityCurveComponent,
    TradeBasedComponent,
    Trade,
)


def daily_logs_to_equity_curve(logs: Sequence[DailyLogEntry], strategy_name: str) -> list[EquityCurveEntry]:
    """
    Equity curve from daily account snapshots.

    Account value is the net liquidity; the daily return is the change from
    the previous log (0 for the first log and after a non-positive value).
    """
    sorted_logs = sorted(logs, key=lambda log: log.date)
    entries: list[EquityCurveEntry] = []
    previous: DailyLogEntry | None = None

    for log in sorted_logs:
        if previous is not None and previous.net_liquidity > 0:
            daily_return = (log.net_liquidity - previous.net_liquidity) / previous.net_liquidity
        else:
            daily_return = 0.0
        entries.append(
            EquityCurveEntry(
                date=log.date,
                daily_return_pct=daily_return,
                account_value=log.net_liquidity,
                margin_req=log.margin_req,
                strategy_name=strategy_name,
            )
        )
        previous = log

    return entries


def trades_to_equity_curve(trades: Sequence[Trade], strategy_name: str) -> list[EquityCurveEntry]:
    """
    Equity curve from cumulative trade P/L.

    The starting balance is backed out of the first trade (funds at close
    minus its P/L). Trades are applied in opening order; each entry is dated
    by the close date, or the open date for trades without one. Margin is
    reported as a fraction of capital after the trade.
    """
    sorted_trades = sorted(trades, key=lambda t: t.date_opened)
    if not sorted_trades:
        return []

    capital = sorted_trades[0].funds_at_close - sorted_trades[0].pl
    entries: list[EquityCurveEntry] = []

    for trade in sorted_trades:
        previous_capital = capital
        capital += trade.pl
        daily_return = (capital - previous_capital) / previous_capital if previous_capital > 0 else 0.0
        entries.append(
            EquityCurveEntry(
                date=trade.date_closed or trade.date_opened,
                daily_return_pct=daily_return,
                account_value=capital,
                margin_req=trade.margin_req / capital if capital > 0 else 0.0,
                strategy_name=strategy_name,
            )
        )

    return entries


def component_to_equity_curve(
    component: EquityCurveComponent | TradeBasedComponent,
) -> list[EquityCurveEntry]:
    """
    Normalize one component to equity-curve entries sorted by date.

    Raises:
        TypeError: Unknown component type
    """
    if isinstance(component, EquityCurveComponent):
        return sorted(component.equity_curve_entries, key=lambda e: e.date)
    if isinstance(component, TradeBasedComponent):
        if component.daily_logs:
            return daily_logs_to_equity_curve(component.daily_logs, component.block_name)
        entries = trades_to_equity_curve(component.trades, component.block_name)
        return sorted(entries, key=lambda e: e.date)
    raise TypeError(f"Unsupported super block component: {type(component).__name__}")
