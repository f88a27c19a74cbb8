import pytest

from ticket_pipeline.config import DEFAULT_CONFIG
from ticket_pipeline.domains import support
from ticket_pipeline.domains.support.models import FilterState
from ticket_pipeline.domains.support.transform import EmptyDatasetError

HEADER = (
    "Creada,Estado,Clave de incidencia,Organizations,Persona asignada,"
    "Campo personalizado (Time to first response),Calificación de satisfacción\n"
)


@pytest.fixture
def export(tmp_path):
    path = tmp_path / "tickets.csv"
    path.write_text(
        HEADER
        + "19/ene/26 12:47 PM,Open,CARE-1,Acme,Ana,-1:00,4\n"
        + "20/ene/26 09:00 AM,Closed,CARE-2,Beta,Luis,0:30,\n"
        + "15/ene/26 08:00 AM,Block,CARE-3,Acme,Ana,,\n"
        + "not a date,Open,CARE-4,Acme,Ana,,\n",
        encoding="utf-8",
    )
    return path


def test_run_builds_dashboard_and_report(export):
    result = support.run(export, config=DEFAULT_CONFIG)

    normalization = result["normalization"]
    assert (len(normalization.records), normalization.skipped_rows, normalization.excluded_rows) == (2, 1, 1)
    assert normalization.warning is not None

    dashboard = result["dashboard"]
    assert dashboard.filters == FilterState(from_month="2026-01", to_month="2026-01")
    assert [r.key for r in dashboard.records] == ["CARE-1", "CARE-2"]
    assert dashboard.kpis.total == 2
    assert dashboard.kpis.breached == 1
    assert dashboard.kpis.csat_average == pytest.approx(4.0)

    assert result["filter_options"].organizations == ("Acme", "Beta")

    report = result["executive_report"]
    assert report.current_month == "2026-01"
    assert (report.current.tickets, report.current.resolved, report.current.backlog) == (2, 1, 1)
    assert [g.keys for g in report.backlog_by_status] == [("CARE-1",)]


def test_run_applies_filters(export):
    result = support.run(export, filters=FilterState(organization="Beta"), config=DEFAULT_CONFIG)
    assert result["dashboard"].kpis.total == 1
    assert result["executive_report"].current.resolved == 1
    assert result["filter_options"].organizations == ("Acme", "Beta")


def test_run_raises_when_nothing_survives(tmp_path):
    path = tmp_path / "tickets.csv"
    path.write_text(HEADER + "bad,Open,CARE-1,Acme,Ana,,\n", encoding="utf-8")
    with pytest.raises(EmptyDatasetError, match="No rows could be interpreted"):
        support.run(path, config=DEFAULT_CONFIG)


def test_run_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        support.run(tmp_path / "missing.csv", config=DEFAULT_CONFIG)


def test_validate_ok(export):
    assert support.validate(export) == {"status": "ok", "row_count": 4, "skipped": 1}


def test_validate_reports_missing_file(tmp_path):
    outcome = support.validate(tmp_path / "missing.csv")
    assert outcome["status"] == "error"
    assert "not found" in outcome["message"]


def test_validate_reports_uninterpretable_export(tmp_path):
    path = tmp_path / "tickets.csv"
    path.write_text("Estado\nOpen\n", encoding="utf-8")
    outcome = support.validate(path)
    assert outcome["status"] == "error"
    assert "Creada" in outcome["message"]
