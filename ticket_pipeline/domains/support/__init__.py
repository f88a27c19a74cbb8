"""Support domain: ticket normalization, dashboard aggregation and executive reporting."""

from pathlib import Path

from ticket_pipeline.config import DashboardConfig, load_dashboard_config
from ticket_pipeline.domains.support.ingest import fetch_ticket_rows
from ticket_pipeline.domains.support.transform import (
    EmptyDatasetError,
    normalize_tickets,
    records_to_frame,
)
from ticket_pipeline.domains.support.filters import default_filter_state, filter_options
from ticket_pipeline.domains.support.dashboard import build_dashboard
from ticket_pipeline.domains.support.executive import build_executive_report
from ticket_pipeline.domains.support.models import FilterState, TicketFrameSchema
from ticket_pipeline.utils.validators import validate_dataframe


def validate(path: Path | str, expectations: bool = False, strict: bool = False) -> dict:
    """Validate a ticket export before running the dashboard pipeline.

    With ``expectations`` the great_expectations suite also runs over the
    normalized frame and its summary is returned under ``"expectations"``.
    """
    try:
        raw = fetch_ticket_rows(path, validate_only=True)
        result = normalize_tickets(raw)
        if result.error:
            return {"status": "error", "message": result.error}

        frame = records_to_frame(result.records)
        match validate_dataframe(frame, TicketFrameSchema):
            case {"valid": True}:
                outcome = {"status": "ok", "row_count": len(raw), "skipped": result.skipped_rows}
            case {"errors": errors}:
                return {"status": "error", "message": "; ".join(errors[:5])}
    except FileNotFoundError as exc:
        return {"status": "error", "message": str(exc)}
    except (TypeError, ValueError) as exc:
        return {"status": "error", "message": f"Validation failed: {exc}"}

    if expectations:
        from ticket_pipeline.validation import run_ticket_expectations

        summary = run_ticket_expectations(frame, strict=strict)
        outcome["expectations"] = summary
        if summary["status"] == "failed":
            outcome = {
                "status": "error",
                "message": "; ".join(summary["failed_expectations"]) or "Expectation suite failed",
                "expectations": summary,
            }
    return outcome


def run(
    path: Path | str,
    filters: FilterState | None = None,
    config: DashboardConfig | None = None,
) -> dict:
    """Execute the full support dashboard pipeline for one export."""
    config = config or load_dashboard_config()
    raw = fetch_ticket_rows(path)
    result = normalize_tickets(raw)
    if result.error:
        raise EmptyDatasetError(result.error)

    filters = filters or default_filter_state(result.records)
    dashboard = build_dashboard(result.records, filters, config)
    report = build_executive_report(dashboard.frame, config)

    return {
        "normalization": result,
        "filter_options": filter_options(result.records),
        "dashboard": dashboard,
        "executive_report": report,
    }
