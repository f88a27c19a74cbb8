"""Dashboard filtering: predicate evaluation, selectable options and default range."""

from collections.abc import Sequence
from dataclasses import dataclass

from ticket_pipeline.domains.support.models import ALL, FilterState, TicketRecord


@dataclass(frozen=True)
class FilterOptions:
    organizations: tuple[str, ...]
    assignees: tuple[str, ...]
    statuses: tuple[str, ...]
    months: tuple[str, ...]


def matches(record: TicketRecord, state: FilterState) -> bool:
    """True when a record passes every active predicate of the filter."""
    if state.from_month != ALL and record.year_month < state.from_month:
        return False
    if state.to_month != ALL and record.year_month > state.to_month:
        return False
    if state.organization != ALL and record.organization != state.organization:
        return False
    if state.assignee != ALL and record.assignee != state.assignee:
        return False
    if state.status != ALL and record.status != state.status:
        return False
    return True


def apply_filters(records: Sequence[TicketRecord], state: FilterState) -> tuple[TicketRecord, ...]:
    """Filtered subset, preserving the ascending creation order of the input."""
    return tuple(r for r in records if matches(r, state))


def filter_options(records: Sequence[TicketRecord]) -> FilterOptions:
    """Distinct non-blank values for each selectable filter."""
    return FilterOptions(
        organizations=tuple(sorted({r.organization for r in records if r.organization})),
        assignees=tuple(sorted({r.assignee for r in records if r.assignee})),
        statuses=tuple(sorted({r.status for r in records if r.status})),
        months=tuple(sorted({r.year_month for r in records})),
    )


def month_bounds(records: Sequence[TicketRecord]) -> tuple[str | None, str | None]:
    months = sorted({r.year_month for r in records})
    if not months:
        return None, None
    return months[0], months[-1]


def default_filter_state(records: Sequence[TicketRecord]) -> FilterState:
    """Filter set on load: the full observed month range, every other predicate open."""
    first, last = month_bounds(records)
    return FilterState(from_month=first or ALL, to_month=last or ALL)
