"""pandera validation of the canonical ticket frame."""

import pandera as pa
import pandas as pd
from pandera import DataFrameSchema

type ValidationResult = dict[str, str | bool | list[str]]

MAX_SAMPLE = 3


def _describe_failures(failure_cases: pd.DataFrame) -> list[str]:
    """One message per (column, check), with the failing row count and a few sample values."""
    messages = []
    cases = failure_cases.assign(column=failure_cases["column"].fillna("<frame>"))
    for (column, check), group in cases.groupby(["column", "check"], sort=True, dropna=False):
        sample = ", ".join(repr(v) for v in group["failure_case"].head(MAX_SAMPLE))
        messages.append(f"Column '{column}' failed '{check}' in {len(group)} rows (e.g. {sample})")
    return messages


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationResult:
    """Lazily validate ``df`` and collect every failure instead of stopping at the first."""
    try:
        schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as e:
        return {"valid": False, "status": "error", "errors": _describe_failures(e.failure_cases)}
    return {"valid": True, "status": "ok", "errors": []}
