"""Grouped ticket series for the dashboard charts."""

import logging

import numpy as np
import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.models import EMPTY_LABEL, NO_STATUS, OTHER_LABEL, SlaStatus
from ticket_pipeline.domains.support.temporal import format_day_month
from ticket_pipeline.utils.transforms import pct

logger = logging.getLogger(__name__)

type AggResult = dict[str, pd.DataFrame]

SLA_COLUMNS = ["year", "total", "compliant", "breached", "compliant_pct", "breached_pct"]
CSAT_COLUMNS = ["year", "csat_average", "responses"]


def _labelled(values: pd.Series, empty_label: str) -> pd.Series:
    """Replace blank labels with a sentinel."""
    return values.where(values != "", empty_label)


def _count_by(frame: pd.DataFrame, column: str, empty_label: str = EMPTY_LABEL) -> pd.DataFrame:
    """Ticket counts per label, by count descending then name ascending."""
    counts = _labelled(frame[column], empty_label).value_counts()
    out = counts.rename_axis("name").reset_index(name="tickets")
    out["tickets"] = out["tickets"].astype(int)
    return out.sort_values(["tickets", "name"], ascending=[False, True], ignore_index=True)


def tickets_by_month(frame: pd.DataFrame) -> pd.DataFrame:
    counts = frame.groupby("year_month").size()
    out = counts.rename_axis("month").reset_index(name="tickets")
    return out.sort_values("month", ignore_index=True)


def tickets_by_year(frame: pd.DataFrame) -> pd.DataFrame:
    counts = frame.groupby("year").size()
    out = counts.rename_axis("year").reset_index(name="tickets")
    return out.sort_values("year", ignore_index=True)


def year_progress(frame: pd.DataFrame) -> pd.DataFrame:
    """Tickets by year, flagging the latest year as partial unless data reaches 31 December."""
    years = tickets_by_year(frame)
    if frame.empty:
        return years.assign(partial=pd.Series(dtype=bool), partial_label=pd.Series(dtype=str))

    latest = frame["created_at"].max().to_pydatetime()
    partial_year = not (latest.month == 12 and latest.day == 31)
    years["partial"] = (years["year"] == latest.year) & partial_year
    years["partial_label"] = np.where(years["partial"], f" (partial to {format_day_month(latest)})", "")
    return years


def status_by_year(frame: pd.DataFrame) -> pd.DataFrame:
    """One row per year, one column per observed status (sorted)."""
    if frame.empty:
        return pd.DataFrame(columns=["year"])
    status = _labelled(frame["status"], NO_STATUS)
    table = pd.crosstab(frame["year"], status, rownames=["year"], colnames=["status"])
    table = table.reindex(columns=sorted(table.columns), fill_value=0)
    table.columns.name = None
    return table.reset_index()


def sla_by_year(frame: pd.DataFrame) -> pd.DataFrame:
    """Compliant / breached counts and shares per year."""
    if frame.empty:
        return pd.DataFrame(columns=SLA_COLUMNS)
    breached = frame["sla_response_status"].eq(SlaStatus.BREACHED.value)
    out = breached.groupby(frame["year"]).agg(total="size", breached="sum").reset_index()
    out["breached"] = out["breached"].astype(int)
    out["compliant"] = out["total"] - out["breached"]
    out["compliant_pct"] = out["compliant"] / out["total"] * 100
    out["breached_pct"] = out["breached"] / out["total"] * 100
    return out[SLA_COLUMNS].sort_values("year", ignore_index=True)


def csat_by_year(frame: pd.DataFrame) -> pd.DataFrame:
    """Mean satisfaction and response count per year, rated tickets only."""
    rated = frame.dropna(subset=["satisfaction"])
    if rated.empty:
        return pd.DataFrame(columns=CSAT_COLUMNS)
    out = rated.groupby("year")["satisfaction"].agg(csat_average="mean", responses="count").reset_index()
    return out[CSAT_COLUMNS].sort_values("year", ignore_index=True)


def top_assignees(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    return _count_by(frame, "assignee").head(config.top_assignees)


def tickets_by_organization(frame: pd.DataFrame) -> pd.DataFrame:
    return _count_by(frame, "organization")


def organization_pie(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """Top organizations plus an "Other" slice for the remainder (omitted when empty)."""
    pie = tickets_by_organization(frame).head(config.top_organizations).copy()
    other = len(frame) - int(pie["tickets"].sum())
    if other > 0:
        pie = pd.concat([pie, pd.DataFrame([{"name": OTHER_LABEL, "tickets": other}])], ignore_index=True)
    total = int(pie["tickets"].sum())
    pie["share_pct"] = [pct(n, total) for n in pie["tickets"]]
    return pie


def build_series(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> AggResult:
    """Produce every grouped series, keyed by chart name."""
    results: AggResult = {
        "tickets_by_month": tickets_by_month(frame),
        "tickets_by_year": tickets_by_year(frame),
        "year_progress": year_progress(frame),
        "status_by_year": status_by_year(frame),
        "sla_by_year": sla_by_year(frame),
        "csat_by_year": csat_by_year(frame),
        "top_assignees": top_assignees(frame, config),
        "tickets_by_organization": tickets_by_organization(frame),
        "organization_pie": organization_pie(frame, config),
    }
    logger.info("Built %d series over %d tickets", len(results), len(frame))
    return results
