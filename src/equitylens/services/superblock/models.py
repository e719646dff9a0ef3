"""Super-block data models.

A super block merges several component blocks into one synthetic equity
curve. Components arrive either as equity-curve entries or as trades (with
optional daily logs); the `block_type` field tells them apart.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from equitylens.libraries.performance.models import EquityCurveEntry, PortfolioStats


class DateAlignmentStrategy(str, Enum):
    """
    How component date lists are combined into one axis.

    INTERSECTION: dates present in every component
    UNION: every date of any component, gaps forward-filled
    EARLIEST_COMMON: union from the first date common to all components
    LATEST_COMMON: union up to the last date common to all components
    """

    INTERSECTION = "intersection"
    UNION = "union"
    EARLIEST_COMMON = "earliest-common"
    LATEST_COMMON = "latest-common"


class Trade(BaseModel):
    """Closed trade of a trade-based block."""

    model_config = ConfigDict(frozen=True)

    date_opened: datetime
    date_closed: datetime | None = None
    pl: float
    funds_at_close: float
    margin_req: float = 0.0
    strategy: str = ""


class DailyLogEntry(BaseModel):
    """End-of-day account snapshot of a trade-based block."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    net_liquidity: float
    current_funds: float = 0.0
    withdrawn: float = 0.0
    trading_funds: float = 0.0
    daily_pl: float = 0.0
    daily_pl_pct: float = 0.0
    drawdown_pct: float = 0.0
    margin_req: float = 0.0


class _ComponentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_id: str
    block_name: str
    # Recorded only; component values are summed unweighted
    weight: float | None = None


class EquityCurveComponent(_ComponentBase):
    """Component that already is an equity curve."""

    block_type: Literal["equity-curve"] = "equity-curve"
    equity_curve_entries: list[EquityCurveEntry] = Field(default_factory=list)


class TradeBasedComponent(_ComponentBase):
    """Component built from trades, preferring daily logs when present."""

    block_type: Literal["trade-based"] = "trade-based"
    trades: list[Trade] = Field(default_factory=list)
    daily_logs: list[DailyLogEntry] = Field(default_factory=list)


SuperBlockComponent = Annotated[
    EquityCurveComponent | TradeBasedComponent,
    Field(discriminator="block_type"),
]


class CombinedEquityCurvePoint(BaseModel):
    """
    One date of the combined curve.

    `component_values` holds each component's real or forward-filled account
    value; `combined_return` is the change from the previous emitted point.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime
    combined_account_value: float
    component_values: dict[str, float]
    combined_return: float
    combined_margin_req: float


class DateRange(BaseModel):
    """Inclusive date range."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime


class SuperBlockData(BaseModel):
    """Combined curve with its statistics and each component's own statistics."""

    model_config = ConfigDict(frozen=True)

    combined_equity_curve: list[CombinedEquityCurvePoint]
    portfolio_stats: PortfolioStats
    component_stats: dict[str, PortfolioStats]
    date_range: DateRange
    alignment_warnings: list[str] = Field(default_factory=list)
