"""CSV loading for equity curves, trades and daily logs.

Files use plain column names; there is no column mapping. Recognized layouts:

Equity curve:
    date,daily_return_pct,account_value[,margin_req][,strategy_name]

Trades:
    date_opened,pl,funds_at_close[,date_closed][,margin_req][,strategy]

Daily logs:
    date,net_liquidity[,current_funds][,withdrawn][,trading_funds][,daily_pl]
    [,daily_pl_pct][,drawdown_pct][,margin_req]

Dates are `YYYY-MM-DD` or ISO 8601 datetimes. `daily_return_pct` is a
fraction (0.01 = 1%). Missing `strategy_name` defaults to the file stem.

Example:
    >>> entries = load_equity_curve(Path("data/iron_condor.csv"))
    >>> component = load_component(Path("data/trades.csv"))
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import ValidationError

from equitylens.errors import EquityCurveLoadError
from equitylens.libraries.performance.models import EquityCurveEntry
from equitylens.services.superblock.models import (
    DailyLogEntry,
    EquityCurveComponent,
    SuperBlockComponent,
    Trade,
    TradeBasedComponent,
)
from equitylens.system import LoggerFactory

logger = LoggerFactory.get_logger()

T = TypeVar("T")

EQUITY_CURVE_COLUMNS = ("date", "daily_return_pct", "account_value")
TRADE_COLUMNS = ("date_opened", "pl", "funds_at_close")
DAILY_LOG_COLUMNS = ("date", "net_liquidity")

_DAILY_LOG_NUMBERS = (
    "current_funds",
    "withdrawn",
    "trading_funds",
    "daily_pl",
    "daily_pl_pct",
    "drawdown_pct",
    "margin_req",
)


def parse_date(value: str) -> datetime:
    """Parse `YYYY-MM-DD` or an ISO 8601 datetime."""
    text = value.strip()
    if not text:
        raise ValueError("empty date")
    return datetime.fromisoformat(text)


def parse_number(value: str) -> float:
    """Parse a number, ignoring surrounding spaces, `$` and thousands separators."""
    text = value.strip().replace(",", "").replace("$", "")
    if not text:
        raise ValueError("empty number")
    return float(text)


def _optional_number(row: dict[str, str | None], column: str) -> float:
    value = row.get(column)
    if value is None or not value.strip():
        return 0.0
    return parse_number(value)


def _unreadable(path: Path, error: Exception) -> EquityCurveLoadError:
    logger.error("loader.unreadable", path=str(path), error=str(error))
    return EquityCurveLoadError(f"Unreadable CSV: {error}", path=str(path))


def _read_rows(path: Path, required: tuple[str, ...], build: Callable[[dict[str, str | None]], T]) -> list[T]:
    if not path.exists():
        raise EquityCurveLoadError("File not found", path=str(path))

    results: list[T] = []
    try:
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            fieldnames = [name.strip() for name in reader.fieldnames or []]
            missing = [column for column in required if column not in fieldnames]
            if missing:
                raise EquityCurveLoadError(f"Missing required columns: {', '.join(missing)}", path=str(path))
            reader.fieldnames = fieldnames

            # Row 1 is the header
            for row_number, row in enumerate(reader, start=2):
                try:
                    results.append(build(row))
                except (ValueError, ValidationError) as e:
                    logger.error("loader.parse_error", path=str(path), row=row_number, error=str(e))
                    raise EquityCurveLoadError(f"Malformed row: {e}", path=str(path), row=row_number) from e
    except (UnicodeDecodeError, csv.Error) as e:
        raise _unreadable(path, e) from e

    logger.debug("loader.file_read", path=str(path), rows=len(results))
    return results


def load_equity_curve(path: Path, strategy_name: str | None = None) -> list[EquityCurveEntry]:
    """
    Load equity-curve entries from CSV.

    Args:
        path: CSV file
        strategy_name: Overrides the `strategy_name` column and the file-stem
            default

    Returns:
        Entries in file order

    Raises:
        EquityCurveLoadError: Missing file, missing columns or malformed row
    """
    default_name = strategy_name or path.stem

    def build(row: dict[str, str | None]) -> EquityCurveEntry:
        name = strategy_name or (row.get("strategy_name") or "").strip() or default_name
        return EquityCurveEntry(
            date=parse_date(row["date"] or ""),
            daily_return_pct=parse_number(row["daily_return_pct"] or ""),
            account_value=parse_number(row["account_value"] or ""),
            margin_req=_optional_number(row, "margin_req"),
            strategy_name=name,
        )

    return _read_rows(path, EQUITY_CURVE_COLUMNS, build)


def load_trades(path: Path) -> list[Trade]:
    """Load closed trades from CSV."""

    def build(row: dict[str, str | None]) -> Trade:
        date_closed = (row.get("date_closed") or "").strip()
        return Trade(
            date_opened=parse_date(row["date_opened"] or ""),
            date_closed=parse_date(date_closed) if date_closed else None,
            pl=parse_number(row["pl"] or ""),
            funds_at_close=parse_number(row["funds_at_close"] or ""),
            margin_req=_optional_number(row, "margin_req"),
            strategy=(row.get("strategy") or "").strip(),
        )

    return _read_rows(path, TRADE_COLUMNS, build)


def load_daily_logs(path: Path) -> list[DailyLogEntry]:
    """Load daily account snapshots from CSV."""

    def build(row: dict[str, str | None]) -> DailyLogEntry:
        return DailyLogEntry(
            date=parse_date(row["date"] or ""),
            net_liquidity=parse_number(row["net_liquidity"] or ""),
            **{column: _optional_number(row, column) for column in _DAILY_LOG_NUMBERS},
        )

    return _read_rows(path, DAILY_LOG_COLUMNS, build)


def _read_header(path: Path) -> list[str]:
    if not path.exists():
        raise EquityCurveLoadError("File not found", path=str(path))
    try:
        with open(path, newline="", encoding="utf-8") as f:
            header = next(csv.reader(f), [])
    except (UnicodeDecodeError, csv.Error) as e:
        raise _unreadable(path, e) from e
    return [name.strip() for name in header]


def load_component(path: Path, block_id: str | None = None) -> SuperBlockComponent:
    """
    Load one super-block component, choosing the layout from the header.

    A header with `pl` is a trade file, one with `net_liquidity` a daily-log
    file, anything else an equity curve. The block name is the file stem.

    Raises:
        EquityCurveLoadError: File cannot be read in the detected layout
    """
    header = _read_header(path)
    name = path.stem
    block_id = block_id or name

    if "pl" in header:
        component: SuperBlockComponent = TradeBasedComponent(
            block_id=block_id,
            block_name=name,
            trades=load_trades(path),
        )
    elif "net_liquidity" in header:
        component = TradeBasedComponent(
            block_id=block_id,
            block_name=name,
            daily_logs=load_daily_logs(path),
        )
    else:
        component = EquityCurveComponent(
            block_id=block_id,
            block_name=name,
            equity_curve_entries=load_equity_curve(path),
        )

    logger.info("loader.component_loaded", path=str(path), block_type=component.block_type, block_name=name)
    return component
