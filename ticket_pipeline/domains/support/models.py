"""Canonical ticket record, filter state and pandera schema for the ticket frame."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

import pandera as pa
from pandera import Column, Check

from ticket_pipeline.domains.support.temporal import year_month, year_of

ALL = "all"
NO_STATUS = "(no status)"
EMPTY_LABEL = "(empty)"
OTHER_LABEL = "Other"

_MONTH_KEY = re.compile(r"\d{4}-\d{2}")


class SlaStatus(StrEnum):
    COMPLIANT = "Compliant"
    BREACHED = "Breached"

    @classmethod
    def from_hours(cls, hours: float | None) -> "SlaStatus":
        """Breached only for a known negative duration; missing data counts as compliant."""
        if hours is not None and hours < 0:
            return cls.BREACHED
        return cls.COMPLIANT


@dataclass(frozen=True)
class TicketRecord:
    key: str
    organization: str
    status: str
    assignee: str
    created_at: datetime
    sla_response_hours: float | None
    satisfaction: float | None
    year: int = field(init=False)
    year_month: str = field(init=False)
    sla_response_status: SlaStatus = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "year", year_of(self.created_at))
        object.__setattr__(self, "year_month", year_month(self.created_at))
        object.__setattr__(self, "sla_response_status", SlaStatus.from_hours(self.sla_response_hours))


@dataclass(frozen=True)
class FilterState:
    """Dashboard filter; ``"all"`` disables a predicate. Month bounds are inclusive."""

    from_month: str = ALL
    to_month: str = ALL
    organization: str = ALL
    assignee: str = ALL
    status: str = ALL

    def __post_init__(self):
        for name in ("from_month", "to_month"):
            value = getattr(self, name)
            if value != ALL and not _MONTH_KEY.fullmatch(value):
                raise ValueError(f"{name} must be 'all' or YYYY-MM, got {value!r}")


FRAME_COLUMNS = [
    "key",
    "organization",
    "status",
    "assignee",
    "created_at",
    "year",
    "year_month",
    "sla_response_hours",
    "sla_response_status",
    "satisfaction",
]


TicketFrameSchema = pa.DataFrameSchema(
    columns={
        "key": Column(str),
        "organization": Column(str),
        "status": Column(str),
        "assignee": Column(str),
        "created_at": Column("datetime64[ns]", nullable=False),
        "year": Column(int, Check.in_range(1970, 2069)),
        "year_month": Column(str, Check.str_matches(r"^\d{4}-\d{2}$")),
        "sla_response_hours": Column(float, nullable=True),
        "sla_response_status": Column(str, Check.isin([s.value for s in SlaStatus])),
        "satisfaction": Column(float, nullable=True),
    },
    coerce=True,
    strict=False,
)
