"""Data validation using Great Expectations for ticket quality checks."""

from ticket_pipeline.validation.expectations import run_ticket_expectations
from ticket_pipeline.validation.reporters import build_validation_report
from ticket_pipeline.validation.suites import build_ticket_suite
