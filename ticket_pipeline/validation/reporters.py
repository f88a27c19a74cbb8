"""Render an expectation-run summary for the console or for export."""

import json
from datetime import datetime

from rich.console import Console
from rich.table import Table

type ReportFormat = str  # "table" | "json" | "summary"


def build_validation_report(summary: dict, output_format: ReportFormat = "table") -> str:
    match output_format:
        case "json":
            return _to_json(summary)
        case "summary":
            return _to_summary(summary)
        case _:
            return _to_table(summary)


def _counts(summary: dict) -> tuple[int, int]:
    results = summary.get("results", [])
    return sum(1 for r in results if r["success"]), len(results)


def _to_json(summary: dict) -> str:
    passed, total = _counts(summary)
    return json.dumps(
        {
            "dataset": "tickets",
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "status": summary.get("status"),
            "total": total,
            "passed": passed,
            "results": summary.get("results", []),
        },
        indent=2,
    )


def _to_summary(summary: dict) -> str:
    passed, total = _counts(summary)
    lines = [f"[tickets] {passed}/{total} passed"]
    lines += [
        f"  FAIL: {r['expectation']} (unexpected: {r['unexpected_count']})"
        for r in summary.get("results", [])
        if not r["success"]
    ]
    return "\n".join(lines)


def _to_table(summary: dict) -> str:
    passed, total = _counts(summary)
    table = Table(title="Ticket expectations", caption=f"{passed}/{total} passed")
    table.add_column("Expectation", style="cyan", no_wrap=True)
    table.add_column("Result", style="bold")
    table.add_column("Unexpected", justify="right")

    for r in summary.get("results", []):
        table.add_row(
            r["expectation"],
            "[green]PASS[/green]" if r["success"] else "[red]FAIL[/red]",
            str(r["unexpected_count"]),
        )

    console = Console(width=120, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()
