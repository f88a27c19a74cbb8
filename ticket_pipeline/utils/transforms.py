"""Common transformation helpers shared by the support domain."""

import re

import pandas as pd

type ColumnMapping = dict[str, str]

_WORD = re.compile(r"[^\W\d_][\w'-]*")


def normalize_header(name: object) -> str:
    """Lower-case and trim a CSV header so lookups are spelling-tolerant."""
    return str(name if name is not None else "").strip().lower()


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to trimmed lower case and apply optional mapping."""
    df.columns = [normalize_header(col) for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def pct(numerator: float, denominator: float) -> float:
    """Percentage of numerator over denominator, 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


def month_delta_pct(current: float, previous: float | None) -> float | None:
    """Month-over-month change in percent, or None when there is no basis."""
    if previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


def title_case_words(text: str) -> str:
    """Capitalize the first letter of every word, lower-casing the rest."""
    return _WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:], str(text or "").lower())
