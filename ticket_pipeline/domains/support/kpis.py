"""Scalar KPIs for the filtered ticket view."""

import logging
from dataclasses import asdict, dataclass

import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.capacity import (
    CapacityHealth,
    MonthCapacity,
    capacity_health,
    tickets_per_person,
)
from ticket_pipeline.domains.support.models import SlaStatus
from ticket_pipeline.utils.transforms import pct

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KpiBundle:
    total: int
    breached: int
    breached_pct: float
    compliant_pct: float
    latest_month: str | None
    latest_month_count: int
    csat_average: float | None
    csat_responses: int
    csat_coverage_pct: float
    tickets_per_person: float | None
    capacity_health: CapacityHealth
    capacity_months: tuple[MonthCapacity, ...]

    def to_dict(self) -> dict:
        return asdict(self)


def compute_kpis(frame: pd.DataFrame, config: DashboardConfig = DEFAULT_CONFIG) -> KpiBundle:
    """Headline numbers for the current filter."""
    total = len(frame)
    breached = int((frame["sla_response_status"] == SlaStatus.BREACHED.value).sum())

    rated = frame["satisfaction"].dropna()
    csat_average = float(rated.mean()) if len(rated) else None

    latest_month = frame["year_month"].max() if total else None
    latest_count = int((frame["year_month"] == latest_month).sum()) if latest_month else 0

    tpp, months = tickets_per_person(frame, config)

    bundle = KpiBundle(
        total=total,
        breached=breached,
        breached_pct=pct(breached, total),
        compliant_pct=100 - pct(breached, total),
        latest_month=latest_month,
        latest_month_count=latest_count,
        csat_average=csat_average,
        csat_responses=len(rated),
        csat_coverage_pct=pct(len(rated), total),
        tickets_per_person=tpp,
        capacity_health=capacity_health(tpp, config),
        capacity_months=tuple(months),
    )
    logger.info("KPIs: %d tickets, %d SLA breaches, capacity %s", total, breached, bundle.capacity_health.label)
    return bundle
