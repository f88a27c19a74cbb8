"""Density matrices: month x status, hour of day, weekday x hour."""

from dataclasses import dataclass

import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.models import NO_STATUS

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
HOURS = range(24)


@dataclass(frozen=True)
class Heatmap:
    matrix: pd.DataFrame
    max_value: int


@dataclass(frozen=True)
class MonthStatusHeatmap(Heatmap):
    states: tuple[str, ...]
    range_label: str


def month_status_heatmap(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> MonthStatusHeatmap:
    """Status counts for the most recent months present in the view.

    Columns cover every status seen in the whole view, so a state absent
    from the recent window still shows as a zero column.
    """
    if frame.empty:
        return MonthStatusHeatmap(matrix=pd.DataFrame(), max_value=0, states=(), range_label="—")

    status = frame["status"].where(frame["status"] != "", NO_STATUS)
    states = sorted(status.unique())
    table = pd.crosstab(frame["year_month"], status, rownames=["month"], colnames=["status"])
    table = table.reindex(columns=states, fill_value=0).sort_index().tail(config.heatmap_months)
    table.columns.name = None

    return MonthStatusHeatmap(
        matrix=table,
        max_value=int(table.to_numpy().max()),
        states=tuple(states),
        range_label=f"{table.index[0]} → {table.index[-1]}",
    )


def hourly_heatmap(frame: pd.DataFrame) -> Heatmap:
    """Tickets per hour of creation, all 24 buckets present."""
    counts = frame["created_at"].dt.hour.value_counts().reindex(HOURS, fill_value=0)
    matrix = pd.DataFrame({"hour": list(HOURS), "tickets": counts.to_numpy().astype(int)})
    return Heatmap(matrix=matrix, max_value=int(matrix["tickets"].max()))


def weekday_hour_heatmap(frame: pd.DataFrame) -> Heatmap:
    """24 x 7 matrix of tickets by hour (rows) and ISO weekday (columns, Monday first)."""
    created = frame["created_at"]
    if frame.empty:
        table = pd.DataFrame(0, index=HOURS, columns=range(7))
    else:
        table = pd.crosstab(created.dt.hour, created.dt.dayofweek, rownames=["hour"], colnames=["weekday"])
        table = table.reindex(index=HOURS, columns=range(7), fill_value=0)

    table = table.astype(int)
    table.index = pd.Index(list(HOURS), name="hour")
    table.columns = list(WEEKDAY_LABELS)
    return Heatmap(matrix=table, max_value=int(table.to_numpy().max()))
