from datetime import datetime

import pytest

from tests.factories import make_record
from ticket_pipeline.domains.support.filters import (
    apply_filters,
    default_filter_state,
    filter_options,
    month_bounds,
)
from ticket_pipeline.domains.support.models import ALL, FilterState


@pytest.fixture
def records():
    return (
        make_record(datetime(2025, 11, 3), status="Open", organization="Acme", assignee="Ana", key="A"),
        make_record(datetime(2025, 12, 9), status="Closed", organization="Beta", assignee="", key="B"),
        make_record(datetime(2026, 1, 19), status="Open", organization="Acme", assignee="Luis", key="C"),
        make_record(datetime(2026, 2, 1), status="Done", organization="", assignee="Ana", key="D"),
    )


def _keys(records):
    return [r.key for r in records]


def test_all_filter_keeps_everything(records):
    assert apply_filters(records, FilterState()) == records


def test_month_bounds_are_inclusive(records):
    selected = apply_filters(records, FilterState(from_month="2025-12", to_month="2026-01"))
    assert _keys(selected) == ["B", "C"]


def test_predicates_are_and_combined(records):
    state = FilterState(organization="Acme", assignee="Ana")
    assert _keys(apply_filters(records, state)) == ["A"]


def test_status_filter_is_exact_match(records):
    assert _keys(apply_filters(records, FilterState(status="Open"))) == ["A", "C"]
    assert apply_filters(records, FilterState(status="open")) == ()


def test_filtering_does_not_mutate_inputs(records):
    state = FilterState(from_month="2026-01")
    apply_filters(records, state)
    assert state.from_month == "2026-01"
    assert len(records) == 4


def test_filter_options_skip_blanks_and_sort(records):
    options = filter_options(records)
    assert options.organizations == ("Acme", "Beta")
    assert options.assignees == ("Ana", "Luis")
    assert options.statuses == ("Closed", "Done", "Open")
    assert options.months == ("2025-11", "2025-12", "2026-01", "2026-02")


def test_default_filter_state_spans_observed_months(records):
    state = default_filter_state(records)
    assert (state.from_month, state.to_month) == ("2025-11", "2026-02")
    assert state.organization == state.assignee == state.status == ALL


def test_month_bounds_empty():
    assert month_bounds(()) == (None, None)
    assert default_filter_state(()) == FilterState()


@pytest.mark.parametrize("bad", ["2026-1", "Jan 2026", ""])
def test_invalid_month_bound_is_rejected(bad):
    with pytest.raises(ValueError):
        FilterState(from_month=bad)
