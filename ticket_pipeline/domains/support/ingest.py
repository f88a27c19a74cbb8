"""Ingest Jira ticket exports."""

import logging
from pathlib import Path

from ticket_pipeline.utils.io import read_csv_rows

logger = logging.getLogger(__name__)


def fetch_ticket_rows(path: Path | str, validate_only: bool = False) -> list[dict[str, str]]:
    """Load raw rows from a CSV export, keyed by lower-cased trimmed header."""
    rows = read_csv_rows(path)
    if validate_only:
        return rows[:500]

    logger.info("Ingested %d raw rows from %s", len(rows), Path(path).name)
    return rows
