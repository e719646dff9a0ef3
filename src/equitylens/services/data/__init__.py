"""CSV input for equity curves, trades and daily logs."""

from equitylens.services.data.loader import (
    load_component,
    load_daily_logs,
    load_equity_curve,
    load_trades,
    parse_date,
    parse_number,
)

__all__ = [
    "load_component",
    "load_daily_logs",
    "load_equity_curve",
    "load_trades",
    "parse_date",
    "parse_number",
]
