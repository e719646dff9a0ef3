"""Super-block combination of several equity-curve sources."""

from equitylens.services.superblock.conversion import (
    component_to_equity_curve,
    daily_logs_to_equity_curve,
    trades_to_equity_curve,
)
from equitylens.services.superblock.models import (
    CombinedEquityCurvePoint,
    DailyLogEntry,
    DateAlignmentStrategy,
    DateRange,
    EquityCurveComponent,
    SuperBlockComponent,
    SuperBlockData,
    Trade,
    TradeBasedComponent,
)
from equitylens.services.superblock.service import (
    align_component_dates,
    combine_super_block,
    parse_components,
)

__all__ = [
    "align_component_dates",
    "combine_super_block",
    "parse_components",
    "component_to_equity_curve",
    "daily_logs_to_equity_curve",
    "trades_to_equity_curve",
    "CombinedEquityCurvePoint",
    "DailyLogEntry",
    "DateAlignmentStrategy",
    "DateRange",
    "EquityCurveComponent",
    "SuperBlockComponent",
    "SuperBlockData",
    "Trade",
    "TradeBasedComponent",
]
