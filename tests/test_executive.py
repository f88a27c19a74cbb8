from datetime import datetime

import pytest

from tests.factories import make_record
from ticket_pipeline.config import DEFAULT_CONFIG
from ticket_pipeline.domains.support.executive import (
    INSUFFICIENT_DATA_INSIGHTS,
    build_executive_report,
    comparison_months,
    format_mom,
    format_pct,
)
from ticket_pipeline.utils.types import HealthStatus, classify_ceiling, classify_floor


@pytest.fixture
def frame(frame_of):
    return frame_of(
        make_record(datetime(2025, 12, 1), status="Closed", key="A-1"),
        make_record(datetime(2025, 12, 2), status="Resuelto", key="A-2"),
        make_record(datetime(2025, 12, 3), status="Open", sla=-1.0, key="A-3"),
        make_record(datetime(2025, 12, 4), status="Cancelado", sla=-1.0, key="A-4"),
        make_record(datetime(2026, 1, 5), status="Done", key="B-1"),
        make_record(datetime(2026, 1, 6), status="closed", key="B-2"),
        make_record(datetime(2026, 1, 7), status="in progress", key="B-5"),
        make_record(datetime(2026, 1, 8), status="in progress", key="B-3"),
        make_record(datetime(2026, 1, 9), status="Waiting for customer", key=""),
        make_record(datetime(2026, 1, 10), status="Cancelled", key="B-9"),
    )


def _metric(report, label):
    return next(m for m in report.metrics if m.label == label)


def test_previous_month_skips_empty_months(frame_of):
    frame = frame_of(make_record(datetime(2025, 10, 3)), make_record(datetime(2026, 1, 3)))
    assert comparison_months(frame) == ("2026-01", "2025-10")


def test_snapshots_exclude_canceled_tickets(frame):
    report = build_executive_report(frame)
    assert (report.current.tickets, report.current.resolved, report.current.backlog) == (5, 2, 3)
    assert (report.previous.tickets, report.previous.resolved, report.previous.backlog) == (3, 2, 1)
    assert report.current.sla_pct == pytest.approx(100.0)
    assert report.previous.sla_pct == pytest.approx(200 / 3)


def test_metrics_and_deltas(frame):
    report = build_executive_report(frame)

    assert [m.label for m in report.metrics] == [
        "Tickets received",
        "Tickets resolved",
        "SLA compliance",
        "Backlog at close",
    ]
    assert _metric(report, "Tickets received").mom == pytest.approx(200 / 3)
    assert _metric(report, "Tickets resolved").mom == pytest.approx(0.0)
    assert _metric(report, "SLA compliance").value == "100.00%"
    assert _metric(report, "SLA compliance").mom == pytest.approx(50.0)
    assert _metric(report, "SLA compliance").status is HealthStatus.GOOD
    assert _metric(report, "Backlog at close").value == "3"
    assert _metric(report, "Backlog at close").status is HealthStatus.GOOD
    assert report.backlog_mom == pytest.approx(200.0)


def test_month_labels(frame):
    report = build_executive_report(frame)
    assert (report.current_month, report.previous_month) == ("2026-01", "2025-12")
    assert (report.month_label, report.previous_month_label) == ("Jan 2026", "Dec 2025")


def test_backlog_groups_sorted_by_count_then_status(frame):
    groups = build_executive_report(frame).backlog_by_status
    assert [(g.status, g.count) for g in groups] == [("In Progress", 2), ("Waiting For Customer", 1)]
    assert groups[0].keys == ("B-3", "B-5")
    assert groups[1].keys == ()


def test_insights_follow_templates(frame):
    insights = build_executive_report(frame).insights
    assert insights[0] == "Ticket volume rising 66.7% in Jan 2026."
    assert insights[1] == "SLA compliance stable at 100.0%, focus on operational continuity."
    assert insights[2] == "Backlog rising 200.0% and needs focus by operational status."
    assert len(insights) == 4


def test_single_month_has_no_comparative_basis(frame_of):
    report = build_executive_report(frame_of(make_record(datetime(2026, 1, 5), sla=-1.0)))

    assert report.previous_month is None
    assert report.previous_month_label == "No previous month"
    assert all(m.mom is None for m in report.metrics)
    assert _metric(report, "SLA compliance").status is HealthStatus.BAD
    assert report.insights[0] == "Ticket volume with no comparative basis in Jan 2026."
    assert "at risk" in report.insights[1]


def test_unchanged_volume_within_dead_zone(frame_of):
    report = build_executive_report(frame_of(make_record(datetime(2025, 12, 5)), make_record(datetime(2026, 1, 5))))
    assert report.insights[0] == "Ticket volume unchanged in Jan 2026."


def test_empty_view_uses_placeholder_insights(frame_of):
    report = build_executive_report(frame_of())
    assert report.current_month is None
    assert report.month_label == "No data"
    assert report.insights == INSUFFICIENT_DATA_INSIGHTS
    assert report.backlog_by_status == ()


@pytest.mark.parametrize(
    "delta, text",
    [(None, "No comparison"), (12.5, "+12.5% vs previous month"), (-3.25, "-3.2% vs previous month"),
     (0.0, "0.0% vs previous month")],
)
def test_format_mom(delta, text):
    assert format_mom(delta) == text


def test_format_pct():
    assert format_pct(66.666) == "66.67%"


def test_report_to_dict(frame):
    payload = build_executive_report(frame).to_dict()
    assert payload["current"]["tickets"] == 5
    assert payload["metrics"][0]["label"] == "Tickets received"
    assert payload["backlog_by_status"][0]["keys"] == ("B-3", "B-5")


@pytest.mark.parametrize(
    "value, status",
    [(100, HealthStatus.GOOD), (95, HealthStatus.GOOD), (94.99, HealthStatus.WARN),
     (90, HealthStatus.WARN), (89.99, HealthStatus.BAD), (0, HealthStatus.BAD)],
)
def test_sla_bands(value, status):
    assert classify_floor(value, DEFAULT_CONFIG.sla_good_pct, DEFAULT_CONFIG.sla_warn_pct) is status


@pytest.mark.parametrize(
    "value, status",
    [(0, HealthStatus.GOOD), (25, HealthStatus.GOOD), (26, HealthStatus.WARN),
     (60, HealthStatus.WARN), (61, HealthStatus.BAD)],
)
def test_backlog_bands(value, status):
    assert classify_ceiling(value, DEFAULT_CONFIG.backlog_good_max, DEFAULT_CONFIG.backlog_warn_max) is status


def test_sla_at_ninety_percent_is_a_warning(frame_of):
    records = [make_record(datetime(2026, 1, day), status="Done") for day in range(1, 10)]
    records.append(make_record(datetime(2026, 1, 10), status="Done", sla=-0.5))
    report = build_executive_report(frame_of(*records))

    assert report.current.sla_pct == pytest.approx(90.0)
    assert _metric(report, "SLA compliance").status is HealthStatus.WARN
    assert "at risk" in report.insights[1]


def test_falling_volume_and_backlog(frame_of):
    previous = [make_record(datetime(2025, 12, day), status="Open") for day in range(1, 5)]
    current = [make_record(datetime(2026, 1, 2), status="Open"), make_record(datetime(2026, 1, 3), status="Done")]
    report = build_executive_report(frame_of(*previous, *current))

    assert report.insights[0] == "Ticket volume falling 50.0% in Jan 2026."
    assert report.insights[2] == "Backlog falling 75.0% and needs focus by operational status."
    assert report.backlog_mom == pytest.approx(-75.0)
