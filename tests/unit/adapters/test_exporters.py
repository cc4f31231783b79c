"""
Unit tests for the report (HTML/PDF) and JSON exporters.

WeasyPrint is replaced with a fake writer so the suite does not depend on
native Pango/Cairo libraries.
"""

import json
from datetime import date

import pytest

from adapters import report_exporter
from adapters.json_exporter import export_state_json
from adapters.report_exporter import (
    export_report_html,
    export_report_pdf,
    format_amount,
    render_report_html,
)
from adapters.repository import ACTIVITIES_KEY, CLIENTS_KEY, parse_activities, parse_clients
from core.domain.errors import ReportGenerationError, StorageWriteError
from core.domain.language import Language
from core.domain.models import Client, EventState


@pytest.fixture
def state(clients, activities):
    return EventState(clients=tuple(clients), activities=tuple(activities))


class TestRenderReportHtml:
    """Fixed layout: title, summary, clients table, activities table."""

    def test_sections_in_order(self, state):
        html = render_report_html(state=state, today=date(2024, 5, 1))

        positions = [
            html.index("EVENTO EMMARK"),
            html.index('id="summary"'),
            html.index('id="clients"'),
            html.index('id="activities"'),
        ]
        assert positions == sorted(positions)
        assert "Reporte de Proceso - 01/05/2024" in html

    def test_summary_values(self, state):
        html = render_report_html(state=state)

        assert "Total Clientes: 2" in html
        assert "Confirmados: 1 (50%)" in html
        assert "Costo Total: $175" in html
        assert "Progreso Actividades: 33%" in html

    def test_client_rows(self, state):
        html = render_report_html(state=state)

        assert html.index("Ana Pérez") < html.index("Luis Gómez")
        assert "<td>CONFIRMADO</td>" in html
        assert "<td>PENDIENTE</td>" in html

    def test_activity_rows(self, state):
        html = render_report_html(state=state)

        assert "<td>$100</td>" in html
        assert "<td>Finalizada</td>" in html
        assert "<td>2024-05-10</td>" in html
        assert html.index("Banquete") < html.index("Postres") < html.index("Flyers")

    def test_empty_state_renders_empty_tables(self):
        html = render_report_html(state=EventState())

        assert "Total Clientes: 0" in html
        assert "Confirmados: 0 (0%)" in html
        assert "<td>" not in html

    def test_english_labels(self, state):
        html = render_report_html(state=state, language=Language.ENGLISH, today=date(2024, 5, 1))

        assert "Progress Report - 05/01/2024" in html
        assert "<td>CONFIRMADO</td>" in html

    def test_escapes_user_text(self):
        html = render_report_html(state=EventState(clients=(Client(name="<b>x</b>"),)))

        assert "&lt;b&gt;x&lt;/b&gt;" in html


class TestExportFiles:
    """PDF/HTML files are written atomically."""

    def test_pdf_uses_renderer(self, state, tmp_path, monkeypatch):
        calls = []

        def fake_pdf(html, path):
            calls.append(html)
            path.write_bytes(b"%PDF-1.7 fake")

        monkeypatch.setattr(report_exporter, "_write_pdf", fake_pdf)
        out = tmp_path / "reports" / "evento-emmark-reporte.pdf"

        result = export_report_pdf(state=state, output_path=out)

        assert result == out
        assert out.read_bytes() == b"%PDF-1.7 fake"
        assert "Banquete" in calls[0]
        assert list(out.parent.iterdir()) == [out]

    def test_empty_pdf_is_well_formed(self, tmp_path, monkeypatch):
        monkeypatch.setattr(report_exporter, "_write_pdf", lambda html, path: path.write_bytes(b"%PDF"))

        out = export_report_pdf(state=EventState(), output_path=tmp_path / "r.pdf")

        assert out.exists()

    def test_renderer_failure_leaves_no_file(self, state, tmp_path, monkeypatch):
        def broken(html, path):
            path.write_bytes(b"partial")
            raise RuntimeError("pango missing")

        monkeypatch.setattr(report_exporter, "_write_pdf", broken)
        out = tmp_path / "r.pdf"

        with pytest.raises(ReportGenerationError, match="pango missing"):
            export_report_pdf(state=state, output_path=out)
        assert list(tmp_path.iterdir()) == []

    def test_unusable_output_dir_raises_report_error(self, state, tmp_path):
        blocker = tmp_path / "archivo"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(ReportGenerationError):
            export_report_html(state=state, output_path=blocker / "sub" / "r.html")
        assert list(tmp_path.iterdir()) == [blocker]

    def test_html_export(self, state, tmp_path):
        out = export_report_html(state=state, output_path=tmp_path / "r.html", title="Boda 2024")

        text = out.read_text(encoding="utf-8")
        assert "<h1>Boda 2024</h1>" in text


def test_format_amount():
    assert format_amount(150) == "150"
    assert format_amount(99.5) == "99.5"
    assert format_amount(1234567, grouped=True) == "1,234,567"


def test_export_state_json(state, tmp_path):
    out = export_state_json(state=state, output_path=tmp_path / "backup" / "evento.json")

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert parse_clients(json.dumps(payload[CLIENTS_KEY])) == list(state.clients)
    assert parse_activities(json.dumps(payload[ACTIVITIES_KEY])) == list(state.activities)


def test_export_state_json_unwritable(state, tmp_path):
    blocker = tmp_path / "archivo"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(StorageWriteError):
        export_state_json(state=state, output_path=blocker / "evento.json")
