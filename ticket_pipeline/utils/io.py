"""File I/O utilities for reading ticket exports and writing pipeline output."""

import json
import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

from ticket_pipeline.utils.transforms import normalize_columns

type FilePath = str | Path
type Payload = pd.DataFrame | dict | list

console = Console()


def read_csv_rows(path: FilePath) -> list[dict[str, str]]:
    """Read a CSV export as raw string rows keyed by normalized header.

    Every cell is kept as text (no NA coercion) so that blank values reach
    the normalizer as empty strings rather than NaN.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Ticket export not found: {path}")

    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
    )
    df = normalize_columns(df)
    console.print(f"  Read {len(df)} rows from {path.name}")
    return df.to_dict(orient="records")


def write_output(payload: Payload, path: FilePath, fmt: str = "json") -> Path:
    """Write a DataFrame or plain payload to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match (fmt, payload):
        case ("json", pd.DataFrame() as df):
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case ("json", data):
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        case ("csv", pd.DataFrame() as df):
            df.to_csv(path, index=False)
        case ("csv", data):
            pd.DataFrame(data).to_csv(path, index=False)
        case (other, _):
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {fmt} output to {path}")
    return path


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML settings file (pyproject.toml or a standalone dashboard config)."""
    with open(path, "rb") as f:
        return tomllib.load(f)
