"""Command-line runner: build the support dashboard and executive report from a CSV export."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ticket_pipeline.config import load_dashboard_config
from ticket_pipeline.domains import support
from ticket_pipeline.domains.support.executive import ExecutiveReport, format_mom
from ticket_pipeline.domains.support.kpis import KpiBundle
from ticket_pipeline.domains.support.models import ALL, FilterState
from ticket_pipeline.domains.support.temporal import month_label
from ticket_pipeline.domains.support.transform import EmptyDatasetError
from ticket_pipeline.utils.io import write_output
from ticket_pipeline.validation.reporters import build_validation_report

console = Console()

STATUS_STYLE = {"good": "green", "warn": "yellow", "bad": "red", "neutral": "white"}


def _kpi_table(kpis: KpiBundle) -> Table:
    table = Table(title="KPIs")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Detail")

    csat = f"{kpis.csat_average:.2f}" if kpis.csat_average is not None else "—"
    tpp = f"{kpis.tickets_per_person:.1f}" if kpis.tickets_per_person is not None else "—"
    latest = month_label(kpis.latest_month) if kpis.latest_month else "—"

    table.add_row("Tickets (view)", f"{kpis.total:,}", "")
    table.add_row("Tickets latest month", f"{kpis.latest_month_count:,}", latest)
    table.add_row("SLA response compliance", f"{kpis.compliant_pct:.2f}%", f"{kpis.breached:,} breached")
    table.add_row("CSAT average", csat, f"Coverage: {kpis.csat_coverage_pct:.2f}%")
    table.add_row(
        "Tickets per person (6m)",
        tpp,
        f"[{kpis.capacity_health.color}]{kpis.capacity_health.label}[/]",
    )
    return table


def _report_table(report: ExecutiveReport) -> Table:
    table = Table(title=f"Executive summary: {report.month_label} vs {report.previous_month_label}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("MoM")
    for metric in report.metrics:
        style = STATUS_STYLE.get(metric.status, "white")
        table.add_row(f"[{style}]●[/{style}] {metric.label}", metric.value, format_mom(metric.mom))
    return table


def _backlog_table(report: ExecutiveReport) -> Table:
    table = Table(title="Backlog by status")
    table.add_column("Status")
    table.add_column("Tickets", justify="right")
    table.add_column("Keys")
    for group in report.backlog_by_status:
        table.add_row(group.status, str(group.count), ", ".join(group.keys))
    return table


def _filters_from_args(args: argparse.Namespace) -> FilterState | None:
    values = {
        "from_month": args.from_month,
        "to_month": args.to_month,
        "organization": args.organization,
        "assignee": args.assignee,
        "status": args.status,
    }
    if all(v is None for v in values.values()):
        return None
    return FilterState(**{k: v if v is not None else ALL for k, v in values.items()})


def main():
    parser = argparse.ArgumentParser(description="Build the support ticket dashboard")
    parser.add_argument("csv_path", help="Jira CSV export")
    parser.add_argument("--from-month", help="First month to include (YYYY-MM)")
    parser.add_argument("--to-month", help="Last month to include (YYYY-MM)")
    parser.add_argument("--organization", help="Only this organization")
    parser.add_argument("--assignee", help="Only this assignee")
    parser.add_argument("--status", help="Only this status")
    parser.add_argument("--config", help="YAML or TOML settings file")
    parser.add_argument("--export", help="Write KPIs and executive report as JSON")
    parser.add_argument("--validate", action="store_true", help="Only validate the export")
    parser.add_argument("--expectations", action="store_true", help="Also run the expectation suite when validating")
    parser.add_argument("--strict", action="store_true", help="Fail on any unmet expectation")
    parser.add_argument("--report-format", choices=["table", "json", "summary"], default="table")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.validate:
        outcome = support.validate(args.csv_path, expectations=args.expectations, strict=args.strict)
        if "expectations" in outcome:
            console.print(build_validation_report(outcome["expectations"], args.report_format))
        match outcome:
            case {"status": "ok", "row_count": n, **rest}:
                console.print(f"[green]✓ {n} rows valid ({rest.get('skipped', 0)} skipped)[/green]")
            case {"status": "error", "message": msg}:
                console.print(f"[red]✗ {msg}[/red]")
                sys.exit(1)
        return

    try:
        filters = _filters_from_args(args)
        config = load_dashboard_config(args.config)
        result = support.run(args.csv_path, filters=filters, config=config)
    except (FileNotFoundError, EmptyDatasetError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    normalization = result["normalization"]
    if normalization.warning:
        console.print(f"[yellow]Warning: {normalization.warning}[/yellow]")

    dashboard = result["dashboard"]
    report = result["executive_report"]

    console.print(_kpi_table(dashboard.kpis))
    console.print(_report_table(report))
    if report.backlog_by_status:
        console.print(_backlog_table(report))
    for insight in report.insights:
        console.print(f"  • {insight}")

    if args.export:
        write_output(
            {
                "filters": vars(dashboard.filters),
                "kpis": dashboard.kpis.to_dict(),
                "executive_report": report.to_dict(),
            },
            args.export,
            fmt="json",
        )


if __name__ == "__main__":
    main()
