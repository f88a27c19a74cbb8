"""Expectation suite for the canonical ticket frame.

These expectations define the quality contract for normalized ticket
records before they feed the dashboard and executive report.
"""

from ticket_pipeline.domains.support.models import SlaStatus

type ExpectationConfig = dict[str, str | dict]
type SuiteConfig = list[ExpectationConfig]

_TICKET_SUITE: SuiteConfig = [
    {
        "expectation_type": "expect_table_row_count_to_be_between",
        "kwargs": {"min_value": 1},
    },
    {
        "expectation_type": "expect_column_to_exist",
        "kwargs": {"column": "created_at"},
    },
    {
        "expectation_type": "expect_column_values_to_not_be_null",
        "kwargs": {"column": "created_at"},
    },
    {
        "expectation_type": "expect_column_values_to_match_regex",
        "kwargs": {"column": "year_month", "regex": r"^\d{4}-\d{2}$"},
    },
    {
        "expectation_type": "expect_column_values_to_be_in_set",
        "kwargs": {
            "column": "sla_response_status",
            "value_set": [s.value for s in SlaStatus],
        },
    },
    {
        "expectation_type": "expect_column_values_to_be_between",
        "kwargs": {"column": "year", "min_value": 1970, "max_value": 2069},
    },
]


def expectation_class_name(expectation_type: str) -> str:
    """``expect_column_to_exist`` -> ``ExpectColumnToExist``."""
    return "".join(part.capitalize() for part in expectation_type.split("_"))


def build_ticket_suite() -> SuiteConfig:
    return [dict(entry) for entry in _TICKET_SUITE]
