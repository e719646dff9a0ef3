"""Unit tests for normalizing super-block components."""

from datetime import datetime

import pytest

from equitylens.libraries.performance import EquityCurveEntry
from equitylens.services.superblock import (
    DailyLogEntry,
    EquityCurveComponent,
    Trade,
    TradeBasedComponent,
    component_to_equity_curve,
    daily_logs_to_equity_curve,
    trades_to_equity_curve,
)


def _log(day: int, net_liquidity: float, margin: float = 0.0) -> DailyLogEntry:
    return DailyLogEntry(date=datetime(2024, 3, day), net_liquidity=net_liquidity, margin_req=margin)


def _trade(day_opened: int, pl: float, funds_at_close: float, day_closed: int | None = None) -> Trade:
    return Trade(
        date_opened=datetime(2024, 3, day_opened),
        date_closed=datetime(2024, 3, day_closed) if day_closed else None,
        pl=pl,
        funds_at_close=funds_at_close,
        margin_req=500.0,
    )


class TestDailyLogs:
    """Daily logs become account values and day-over-day returns."""

    def test_returns_from_net_liquidity(self):
        """First return is 0, then relative change."""
        entries = daily_logs_to_equity_curve([_log(2, 110.0), _log(1, 100.0), _log(3, 99.0)], "Logs")

        assert [e.account_value for e in entries] == [100.0, 110.0, 99.0]
        assert entries[0].daily_return_pct == 0.0
        assert entries[1].daily_return_pct == pytest.approx(0.1)
        assert entries[2].daily_return_pct == pytest.approx(-0.1)
        assert all(e.strategy_name == "Logs" for e in entries)

    def test_non_positive_previous_value_gives_zero_return(self):
        """No return is defined after a zero balance."""
        entries = daily_logs_to_equity_curve([_log(1, 0.0), _log(2, 50.0)], "Logs")

        assert entries[1].daily_return_pct == 0.0

    def test_margin_copied_from_log(self):
        """Margin requirement passes through."""
        entries = daily_logs_to_equity_curve([_log(1, 100.0, margin=0.4)], "Logs")

        assert entries[0].margin_req == 0.4


class TestTrades:
    """Trades become a cumulative P/L curve."""

    def test_capital_backed_out_of_first_trade(self):
        """Start balance is funds at close minus P/L of the first trade."""
        entries = trades_to_equity_curve([_trade(1, 100.0, 10_100.0, 2), _trade(3, -202.0, 9_898.0, 4)], "Trades")

        assert [e.account_value for e in entries] == [10_100.0, 9_898.0]
        assert entries[0].daily_return_pct == pytest.approx(0.01)
        assert entries[1].daily_return_pct == pytest.approx(-0.02)
        assert entries[0].date == datetime(2024, 3, 2)

    def test_open_trade_dated_by_open_date(self):
        """Trades without a close date use the open date."""
        entries = trades_to_equity_curve([_trade(5, 50.0, 1_050.0)], "Trades")

        assert entries[0].date == datetime(2024, 3, 5)

    def test_margin_as_fraction_of_capital(self):
        """Margin is relative to capital after the trade."""
        entries = trades_to_equity_curve([_trade(1, 0.0, 1_000.0, 1)], "Trades")

        assert entries[0].margin_req == pytest.approx(0.5)

    def test_no_trades(self):
        """No trades, no curve."""
        assert trades_to_equity_curve([], "Trades") == []


class TestComponentToEquityCurve:
    """Dispatch on component type."""

    def test_equity_curve_component_sorted(self):
        """Entries are returned in date order."""
        late = EquityCurveEntry(date=datetime(2024, 3, 2), daily_return_pct=0.0, account_value=2.0)
        early = EquityCurveEntry(date=datetime(2024, 3, 1), daily_return_pct=0.0, account_value=1.0)
        component = EquityCurveComponent(block_id="b1", block_name="Curve", equity_curve_entries=[late, early])

        assert component_to_equity_curve(component) == [early, late]

    def test_trade_component_prefers_daily_logs(self):
        """Daily logs win over trades when both are present."""
        component = TradeBasedComponent(
            block_id="b2",
            block_name="Mixed",
            trades=[_trade(1, 100.0, 10_100.0, 1)],
            daily_logs=[_log(1, 500.0), _log(2, 510.0)],
        )

        entries = component_to_equity_curve(component)

        assert [e.account_value for e in entries] == [500.0, 510.0]
        assert entries[0].strategy_name == "Mixed"

    def test_trade_component_without_logs_uses_trades(self):
        """Trades are used when no daily logs exist."""
        component = TradeBasedComponent(block_id="b3", block_name="Trades", trades=[_trade(1, 100.0, 10_100.0, 1)])

        assert [e.account_value for e in component_to_equity_curve(component)] == [10_100.0]

    def test_unknown_component_type(self):
        """Anything else is rejected."""
        with pytest.raises(TypeError):
            component_to_equity_curve(object())
