"""Root conftest - shared equity-curve builders."""

from datetime import datetime, timedelta
from typing import Callable, Sequence

import pytest

from equitylens.libraries.performance.models import EquityCurveEntry


def build_entries(
    returns: Sequence[float],
    start: datetime = datetime(2024, 1, 1),
    initial_capital: float = 10_000.0,
    strategy_name: str = "Alpha",
    margin_req: float = 0.0,
) -> list[EquityCurveEntry]:
    """Compound daily returns from `initial_capital`, one entry per calendar day."""
    entries = []
    value = initial_capital
    for offset, daily_return in enumerate(returns):
        value *= 1 + daily_return
        entries.append(
            EquityCurveEntry(
                date=start + timedelta(days=offset),
                daily_return_pct=daily_return,
                account_value=value,
                margin_req=margin_req,
                strategy_name=strategy_name,
            )
        )
    return entries


@pytest.fixture
def make_entries() -> Callable[..., list[EquityCurveEntry]]:
    """Factory fixture for compounded equity-curve entries."""
    return build_entries


@pytest.fixture
def streak_scenario_entries() -> list[EquityCurveEntry]:
    """Three wins, two losses, one win at constant margin."""
    return build_entries([0.01, 0.02, 0.015, -0.01, -0.005, 0.01], margin_req=0.25)


@pytest.fixture
def write_csv(tmp_path) -> Callable[[str, str], object]:
    """Write CSV text to a file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
