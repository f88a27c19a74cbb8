"""Great Expectations context and batch management.

Uses an ephemeral (in-memory) DataContext so validation runs without a
GE project directory on disk.
"""

import great_expectations as gx
import pandas as pd

DATASOURCE_NAME = "ticket_pipeline"
ASSET_NAME = "ticket_records"
BATCH_DEFINITION_NAME = "whole_frame"


def get_data_context():
    """Return an ephemeral Great Expectations DataContext."""
    return gx.get_context(mode="ephemeral")


def get_batch(df: pd.DataFrame, context=None):
    """Register a pandas datasource on the context and return a batch for ``df``."""
    context = context or get_data_context()
    datasource = context.data_sources.add_pandas(name=DATASOURCE_NAME)
    asset = datasource.add_dataframe_asset(name=ASSET_NAME)
    batch_definition = asset.add_batch_definition_whole_dataframe(BATCH_DEFINITION_NAME)
    return batch_definition.get_batch(batch_parameters={"dataframe": df})
