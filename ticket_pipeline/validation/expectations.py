"""Run the ticket expectation suite with Great Expectations."""

import great_expectations as gx
import pandas as pd
from rich.console import Console

from ticket_pipeline.validation.context import get_batch
from ticket_pipeline.validation.suites import build_ticket_suite, expectation_class_name

type ValidationStatus = str  # "passed" | "warning" | "failed"

console = Console()


def classify_outcome(total: int, passed: int, strict: bool = False) -> ValidationStatus:
    match (total - passed):
        case 0:
            return "passed"
        case n if n <= 2 and not strict:
            return "warning"
        case _:
            return "failed"


def run_ticket_expectations(
    df: pd.DataFrame,
    strict: bool = False,
) -> dict[str, ValidationStatus | int | list[str] | list[dict]]:
    """Run the ticket expectation suite against the canonical frame.

    Returns a summary dict with pass/fail status plus one result entry per
    expectation for the reporters.
    """
    batch = get_batch(df)

    results: list[dict] = []
    failed_expectations: list[str] = []

    for expectation in build_ticket_suite():
        name = expectation["expectation_type"]
        kwargs = expectation.get("kwargs", {})

        expectation_cls = getattr(gx.expectations, expectation_class_name(name), None)
        if expectation_cls is None:
            console.print(f"  [yellow]Unknown expectation: {name}[/yellow]")
            failed_expectations.append(f"{name}: not supported")
            results.append({"expectation": name, "success": False,
                            "observed_value": "not supported", "unexpected_count": -1})
            continue

        outcome = batch.validate(expectation_cls(**kwargs))
        unexpected = outcome.result.get("unexpected_count", 0)
        results.append({
            "expectation": name,
            "success": bool(outcome.success),
            "observed_value": str(outcome.result.get("observed_value", "")),
            "unexpected_count": unexpected,
        })
        if not outcome.success:
            failed_expectations.append(f"{name}({kwargs}): {unexpected} failures")

    total = len(results)
    passed = sum(1 for r in results if r["success"])
    status = classify_outcome(total, passed, strict)

    color = _status_color(status)
    console.print(f"  [{color}]tickets: {passed}/{total} expectations passed ({status})[/{color}]")

    return {
        "status": status,
        "total": total,
        "passed": passed,
        "failed_expectations": failed_expectations,
        "results": results,
    }


def _status_color(status: ValidationStatus) -> str:
    match status:
        case "passed":
            return "green"
        case "warning":
            return "yellow"
        case "failed":
            return "red"
        case _:
            return "white"
