"""Normalize raw Jira export rows into canonical ticket records."""

import logging
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import pandas as pd

from ticket_pipeline.domains.support.durations import parse_duration
from ticket_pipeline.domains.support.fields import (
    ASSIGNEE_FIELDS,
    CREATED_FIELDS,
    KEY_FIELDS,
    ORGANIZATION_FIELDS,
    SATISFACTION_FIELDS,
    SLA_RESPONSE_FIELDS,
    STATUS_FIELDS,
    resolve_field,
    resolve_text,
)
from ticket_pipeline.domains.support.models import FRAME_COLUMNS, TicketRecord
from ticket_pipeline.domains.support.temporal import parse_created
from ticket_pipeline.utils.types import RawRow

logger = logging.getLogger(__name__)

BLOCKED_STATUS = re.compile(r"\b(?:block(?:ed)?|hold)\b", re.IGNORECASE)


class EmptyDatasetError(ValueError):
    """No row of the batch could be turned into a ticket record."""


@dataclass(frozen=True)
class NormalizationResult:
    records: tuple[TicketRecord, ...]
    skipped_rows: int
    excluded_rows: int

    @property
    def error(self) -> str | None:
        if self.records:
            return None
        return (
            "No rows could be interpreted: check that the export has a 'Creada' "
            "column formatted like 19/ene/26 12:47 PM."
        )

    @property
    def warning(self) -> str | None:
        if not self.skipped_rows:
            return None
        return f"{self.skipped_rows} rows were skipped because their 'Creada' date could not be interpreted."


def parse_score(value: object) -> float | None:
    """Numeric satisfaction score, None when blank or not a finite number."""
    if value is None:
        return None
    text = str(value).strip()
    # float() also takes "1_0" and non-ASCII digits
    if not text or "_" in text or not text.isascii():
        return None
    try:
        score = float(text)
    except ValueError:
        return None
    return score if math.isfinite(score) else None


def is_blocked_status(status: str) -> bool:
    return BLOCKED_STATUS.search(status) is not None


def normalize_tickets(rows: Iterable[RawRow]) -> NormalizationResult:
    """Turn raw rows into canonical records sorted by creation time.

    Rows with an unparseable created date are skipped and counted; rows in a
    block/hold status are excluded silently.
    """
    records: list[TicketRecord] = []
    skipped = 0
    excluded = 0

    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise TypeError(f"Row {index} is not a mapping of column name to value: {type(row).__name__}")

        created_at = parse_created(resolve_text(row, CREATED_FIELDS))
        if created_at is None:
            skipped += 1
            continue

        status = resolve_text(row, STATUS_FIELDS)
        if is_blocked_status(status):
            excluded += 1
            continue

        records.append(TicketRecord(
            key=resolve_text(row, KEY_FIELDS),
            organization=resolve_text(row, ORGANIZATION_FIELDS),
            status=status,
            assignee=resolve_text(row, ASSIGNEE_FIELDS),
            created_at=created_at,
            sla_response_hours=parse_duration(resolve_field(row, SLA_RESPONSE_FIELDS)),
            satisfaction=parse_score(resolve_field(row, SATISFACTION_FIELDS)),
        ))

    records.sort(key=lambda r: r.created_at)

    if skipped:
        logger.warning("Skipped %d rows with an unparseable created date", skipped)
    if not records:
        logger.warning("No ticket records survived normalization")
    logger.info(
        "Normalized %d tickets (%d skipped, %d excluded as block/hold)",
        len(records),
        skipped,
        excluded,
    )
    return NormalizationResult(records=tuple(records), skipped_rows=skipped, excluded_rows=excluded)


def records_to_frame(records: Iterable[TicketRecord]) -> pd.DataFrame:
    """Build the canonical ticket frame used by every aggregation."""
    frame = pd.DataFrame(
        [
            {
                "key": r.key,
                "organization": r.organization,
                "status": r.status,
                "assignee": r.assignee,
                "created_at": r.created_at,
                "year": r.year,
                "year_month": r.year_month,
                "sla_response_hours": r.sla_response_hours,
                "sla_response_status": str(r.sla_response_status),
                "satisfaction": r.satisfaction,
            }
            for r in records
        ],
        columns=FRAME_COLUMNS,
    )
    frame["created_at"] = pd.to_datetime(frame["created_at"])
    frame["year"] = frame["year"].astype("int64")
    frame["sla_response_hours"] = frame["sla_response_hours"].astype(float)
    frame["satisfaction"] = frame["satisfaction"].astype(float)
    return frame
