"""Shared utilities for the ticket pipeline."""

from ticket_pipeline.utils.io import read_csv_rows, write_output
from ticket_pipeline.utils.transforms import normalize_columns, pct, month_delta_pct
from ticket_pipeline.utils.validators import validate_dataframe
from ticket_pipeline.utils.types import HealthStatus, RawRow, YearMonth
