"""Assemble every dashboard view for one filter state."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ticket_pipeline.config import DEFAULT_CONFIG, DashboardConfig
from ticket_pipeline.domains.support.filters import apply_filters
from ticket_pipeline.domains.support.heatmaps import (
    Heatmap,
    MonthStatusHeatmap,
    hourly_heatmap,
    month_status_heatmap,
    weekday_hour_heatmap,
)
from ticket_pipeline.domains.support.kpis import KpiBundle, compute_kpis
from ticket_pipeline.domains.support.models import FilterState, TicketRecord
from ticket_pipeline.domains.support.series import AggResult, build_series
from ticket_pipeline.domains.support.transform import records_to_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dashboard:
    filters: FilterState
    records: tuple[TicketRecord, ...]
    frame: pd.DataFrame
    kpis: KpiBundle
    series: AggResult
    month_status: MonthStatusHeatmap
    hourly: Heatmap
    weekly: Heatmap


def build_dashboard(
    records: Sequence[TicketRecord],
    filters: FilterState | None = None,
    config: DashboardConfig = DEFAULT_CONFIG,
) -> Dashboard:
    """Filter the record set and compute KPIs, series and heatmaps.

    Pure with respect to its inputs: neither the records nor the filter are
    modified, so callers may recompute freely on every filter change.
    """
    filters = filters or FilterState()
    selected = apply_filters(records, filters)
    frame = records_to_frame(selected)

    dashboard = Dashboard(
        filters=filters,
        records=selected,
        frame=frame,
        kpis=compute_kpis(frame, config),
        series=build_series(frame, config),
        month_status=month_status_heatmap(frame, config),
        hourly=hourly_heatmap(frame),
        weekly=weekday_hour_heatmap(frame),
    )
    logger.info("Dashboard built for %d of %d tickets", len(selected), len(records))
    return dashboard
