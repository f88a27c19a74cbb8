"""Resolve logical ticket fields from rows with varying header spellings.

Jira exports differ in header language and punctuation depending on the
instance locale and custom-field naming, so each logical field lists every
known header in priority order. Resolution prefers a candidate that carries
a non-blank value; only when none does is a merely present (blank) header
returned.
"""

from collections.abc import Mapping, Sequence

from ticket_pipeline.utils.types import RawValue

type Candidates = Sequence[str]

CREATED_FIELDS = ("creada",)
KEY_FIELDS = ("clave de incidencia", "key")
STATUS_FIELDS = ("estado",)
ASSIGNEE_FIELDS = ("persona asignada",)

ORGANIZATION_FIELDS = (
    "campo personalizado (organizations)",
    "organizations",
    "organization",
    "organisation",
)

SLA_RESPONSE_FIELDS = (
    "campo personalizado (time to first response)",
    "campo personalizado (time to first response).",
    "custom field (time to first response)",
    "custom field (time to first response).",
    "time to first response",
    "time to first response (hrs)",
    "sla response",
    "sla de response",
)

SATISFACTION_FIELDS = (
    "calificación de satisfacción",
    "calificacion de satisfaccion",
    "satisfaction",
)


def _is_blank(value: object) -> bool:
    return value is None or str(value).strip() == ""


def resolve_field(row: Mapping[str, RawValue], candidates: Candidates) -> RawValue:
    """Return the first non-blank candidate value, else the first present one, else None."""
    for name in candidates:
        if not _is_blank(row.get(name)):
            return row[name]
    for name in candidates:
        if name in row:
            return row[name]
    return None


def resolve_text(row: Mapping[str, RawValue], candidates: Candidates) -> str:
    """Resolve a field as trimmed text, empty when absent."""
    value = resolve_field(row, candidates)
    return "" if value is None else str(value).strip()
