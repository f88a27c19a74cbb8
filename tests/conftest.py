"""Shared fixtures for the ticket pipeline tests."""

import pytest

from ticket_pipeline.domains.support.models import TicketRecord
from ticket_pipeline.domains.support.transform import records_to_frame


@pytest.fixture
def frame_of():
    """Build a canonical frame from records, sorted like the normalizer output."""
    def _build(*records: TicketRecord):
        return records_to_frame(sorted(records, key=lambda r: r.created_at))
    return _build
