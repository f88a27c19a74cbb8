"""Month-over-month comparative analytics for the executive report.

The current month is the latest month present in the filtered view and
the previous month is the next-latest month present, so a month without
tickets is skipped rather than compared as zero. Canceled tickets are
removed from both months before anything is counted.
"""

import logging
from dataclasses import asdict, dataclass

import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.models import SlaStatus
from ticket_pipeline.domains.support.temporal import month_label
from ticket_pipeline.utils.transforms import month_delta_pct, pct, title_case_words
from ticket_pipeline.utils.types import HealthStatus, classify_ceiling, classify_floor

logger = logging.getLogger(__name__)

DEAD_ZONE_PCT = 0.05

INSUFFICIENT_DATA_INSIGHTS = (
    "Not enough filtered data to build this month's insights.",
    "Load a CSV and select a client to see month-over-month comparisons.",
    "This section prioritises conclusions to speed up executive decisions.",
)


@dataclass(frozen=True)
class MonthSnapshot:
    month: str | None
    tickets: int
    resolved: int
    sla_pct: float
    backlog: int


@dataclass(frozen=True)
class ReportMetric:
    label: str
    value: str
    mom: float | None
    status: HealthStatus


@dataclass(frozen=True)
class BacklogGroup:
    status: str
    count: int
    keys: tuple[str, ...]


@dataclass(frozen=True)
class ExecutiveReport:
    current_month: str | None
    previous_month: str | None
    month_label: str
    previous_month_label: str
    current: MonthSnapshot
    previous: MonthSnapshot
    metrics: tuple[ReportMetric, ...]
    backlog_by_status: tuple[BacklogGroup, ...]
    resolved_mom: float | None
    backlog_mom: float | None
    insights: tuple[str, ...]

    def to_dict(self) -> dict:
        return asdict(self)


def format_int(value: int) -> str:
    return f"{int(value):,}"


def format_pct(value: float) -> str:
    return f"{value:.2f}%"


def format_mom(delta: float | None) -> str:
    if delta is None:
        return "No comparison"
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:.1f}% vs previous month"


def _status_keys(frame: pd.DataFrame) -> pd.Series:
    return frame["status"].map(lambda s: str(s).strip().lower())


def _is_closed(frame: pd.DataFrame, config: DashboardConfig) -> pd.Series:
    return _status_keys(frame).isin(config.closed_statuses)


def comparison_months(frame: pd.DataFrame) -> tuple[str | None, str | None]:
    """Latest and next-latest months present in the view."""
    months = sorted(frame["year_month"].unique())
    current = months[-1] if months else None
    previous = months[-2] if len(months) > 1 else None
    return current, previous


def month_subset(frame: pd.DataFrame, month: str | None, config: DashboardConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    """Tickets of one month with canceled statuses removed."""
    if month is None:
        return frame.iloc[0:0]
    subset = frame[frame["year_month"] == month]
    return subset[~_status_keys(subset).isin(config.canceled_statuses)]


def snapshot(subset: pd.DataFrame, month: str | None, config: DashboardConfig = DEFAULT_CONFIG) -> MonthSnapshot:
    tickets = len(subset)
    resolved = int(_is_closed(subset, config).sum())
    breached = int((subset["sla_response_status"] == SlaStatus.BREACHED.value).sum())
    return MonthSnapshot(
        month=month,
        tickets=tickets,
        resolved=resolved,
        sla_pct=100 - pct(breached, tickets),
        backlog=tickets - resolved,
    )


def mom(current: float, previous: float, previous_snapshot: MonthSnapshot) -> float | None:
    """Month-over-month delta; None when the previous month has no tickets to compare."""
    if not previous_snapshot.tickets:
        return None
    return month_delta_pct(current, previous)


def backlog_by_status(subset: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> tuple[BacklogGroup, ...]:
    """Open tickets grouped by status with their sorted ticket keys."""
    rows = subset.assign(status_label=subset["status"].map(lambda s: str(s).strip()))
    open_rows = rows[(rows["status_label"] != "") & ~_is_closed(rows, config)]

    groups = []
    for raw_status, group in open_rows.groupby("status_label"):
        keys = sorted(k for k in group["key"] if k)
        groups.append(BacklogGroup(status=title_case_words(raw_status), count=len(group), keys=tuple(keys)))

    return tuple(sorted(groups, key=lambda g: (-g.count, g.status)))


def _describe_change(delta: float | None, up: str, down: str) -> str:
    match delta:
        case None:
            return "with no comparative basis"
        case d if abs(d) < DEAD_ZONE_PCT:
            return "unchanged"
        case d if d > 0:
            return f"{up} {d:.1f}%"
        case d:
            return f"{down} {abs(d):.1f}%"


def build_insights(
    current: MonthSnapshot,
    previous: MonthSnapshot,
    config: DashboardConfig = DEFAULT_CONFIG,
) -> tuple[str, ...]:
    """Narrative bullets for the report summary."""
    if current.month is None:
        return INSUFFICIENT_DATA_INSIGHTS

    tickets_mom = mom(current.tickets, previous.tickets, previous)
    backlog_mom = mom(current.backlog, previous.backlog, previous)
    sla_state = "stable" if current.sla_pct >= config.sla_good_pct else "at risk"

    return (
        f"Ticket volume {_describe_change(tickets_mom, 'rising', 'falling')} in {month_label(current.month)}.",
        f"SLA compliance {sla_state} at {current.sla_pct:.1f}%, focus on operational continuity.",
        f"Backlog {_describe_change(backlog_mom, 'rising', 'falling')} and needs focus by operational status.",
        "Efforts are concentrated on delivering pending work within the week.",
    )


def build_executive_report(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> ExecutiveReport:
    """Compare the latest month in the view against the one before it."""
    current_month, previous_month = comparison_months(frame)
    current_rows = month_subset(frame, current_month, config)
    previous_rows = month_subset(frame, previous_month, config)

    current = snapshot(current_rows, current_month, config)
    previous = snapshot(previous_rows, previous_month, config)

    resolved_mom = mom(current.resolved, previous.resolved, previous)
    backlog_mom = mom(current.backlog, previous.backlog, previous)

    metrics = (
        ReportMetric(
            label="Tickets received",
            value=format_int(current.tickets),
            mom=mom(current.tickets, previous.tickets, previous),
            status=HealthStatus.NEUTRAL,
        ),
        ReportMetric(
            label="Tickets resolved",
            value=format_int(current.resolved),
            mom=resolved_mom,
            status=HealthStatus.NEUTRAL,
        ),
        ReportMetric(
            label="SLA compliance",
            value=format_pct(current.sla_pct),
            mom=mom(current.sla_pct, previous.sla_pct, previous),
            status=classify_floor(current.sla_pct, config.sla_good_pct, config.sla_warn_pct),
        ),
        ReportMetric(
            label="Backlog at close",
            value=format_int(current.backlog),
            mom=backlog_mom,
            status=classify_ceiling(current.backlog, config.backlog_good_max, config.backlog_warn_max),
        ),
    )

    report = ExecutiveReport(
        current_month=current_month,
        previous_month=previous_month,
        month_label=month_label(current_month) if current_month else "No data",
        previous_month_label=month_label(previous_month) if previous_month else "No previous month",
        current=current,
        previous=previous,
        metrics=metrics,
        backlog_by_status=backlog_by_status(current_rows, config),
        resolved_mom=resolved_mom,
        backlog_mom=backlog_mom,
        insights=build_insights(current, previous, config),
    )
    logger.info(
        "Executive report for %s vs %s: %d tickets, %d backlog",
        report.month_label,
        report.previous_month_label,
        current.tickets,
        current.backlog,
    )
    return report
