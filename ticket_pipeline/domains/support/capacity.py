"""Team headcount table and tickets-per-person capacity metric."""

import logging
from dataclasses import dataclass

import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.temporal import is_month_end, year_month
from ticket_pipeline.utils.types import YearMonth

logger = logging.getLogger(__name__)

NO_DATA = "No data"


@dataclass(frozen=True)
class CapacityHealth:
    label: str
    color: str


@dataclass(frozen=True)
class MonthCapacity:
    month: YearMonth
    tickets: int
    team_size: int
    tickets_per_person: float


def _month_tuple(key: str | None) -> tuple[int, int] | None:
    if not key or "-" not in key:
        return None
    parts = key.split("-")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def team_size(month: YearMonth, config: DashboardConfig = DEFAULT_CONFIG) -> int | None:
    """Headcount for a ``YYYY-MM`` month, None outside every configured period."""
    target = _month_tuple(month)
    if target is None:
        return None
    for period in config.team_sizes:
        start = _month_tuple(period.start)
        end = _month_tuple(period.end)
        if start is not None and target < start:
            continue
        if end is not None and target > end:
            continue
        return period.size
    return None


def capacity_window(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> list[YearMonth]:
    """Trailing closed months used for the capacity average.

    The month holding the latest ticket only counts as closed when that
    ticket was created on the month's last calendar day.
    """
    if frame.empty:
        return []
    months = sorted(frame["year_month"].unique())
    latest = frame["created_at"].max().to_pydatetime()
    if not is_month_end(latest):
        current = year_month(latest)
        months = [m for m in months if m != current]
    return months[-config.capacity_window_months:]


def tickets_per_person(
    frame: pd.DataFrame,
    config: DashboardConfig = DEFAULT_CONFIG,
) -> tuple[float | None, list[MonthCapacity]]:
    """Average monthly tickets per team member over the trailing closed window."""
    counts = frame["year_month"].value_counts()
    detail = []
    for month in capacity_window(frame, config):
        size = team_size(month, config)
        if not size:
            continue
        tickets = int(counts.get(month, 0))
        detail.append(MonthCapacity(month=month, tickets=tickets, team_size=size,
                                    tickets_per_person=tickets / size))

    if not detail:
        return None, detail
    average = sum(m.tickets_per_person for m in detail) / len(detail)
    logger.info("Tickets per person over %d months: %.2f", len(detail), average)
    return average, detail


def capacity_health(value: float | None, config: DashboardConfig = DEFAULT_CONFIG) -> CapacityHealth:
    """Band the tickets-per-person average into a capacity label."""
    bands = config.capacity_bands
    match value:
        case None:
            return CapacityHealth(NO_DATA, "#94a3b8")
        case v if v < bands.optimal_min:
            return CapacityHealth("Has Capacity", "#2563eb")
        case v if v <= bands.optimal_max:
            return CapacityHealth("Optimal", "#22c55e")
        case v if v <= bands.limit_max:
            return CapacityHealth("At Limit", "#f59e0b")
        case _:
            return CapacityHealth("Warning", "#ef4444")
