from ticket_pipeline.domains.support.fields import (
    ORGANIZATION_FIELDS,
    SLA_RESPONSE_FIELDS,
    resolve_field,
    resolve_text,
)


def test_first_non_blank_candidate_wins():
    row = {"organizations": "", "organization": "Acme"}
    assert resolve_field(row, ORGANIZATION_FIELDS) == "Acme"


def test_candidate_order_breaks_ties():
    row = {"organization": "Second", "campo personalizado (organizations)": "First"}
    assert resolve_field(row, ORGANIZATION_FIELDS) == "First"


def test_falls_back_to_present_blank_value():
    row = {"organisation": "   ", "other": "x"}
    assert resolve_field(row, ORGANIZATION_FIELDS) == "   "


def test_none_counts_as_blank():
    assert resolve_field({"organizations": None, "organization": "X"}, ORGANIZATION_FIELDS) == "X"
    assert resolve_field({"organizations": None}, ORGANIZATION_FIELDS) is None


def test_absent_field_resolves_to_none():
    assert resolve_field({"estado": "Open"}, ORGANIZATION_FIELDS) is None


def test_sla_header_with_trailing_period():
    row = {"campo personalizado (time to first response).": "-0:15"}
    assert resolve_field(row, SLA_RESPONSE_FIELDS) == "-0:15"


def test_resolve_text_trims_and_defaults_to_empty():
    assert resolve_text({"organization": "  Acme  "}, ORGANIZATION_FIELDS) == "Acme"
    assert resolve_text({}, ORGANIZATION_FIELDS) == ""
