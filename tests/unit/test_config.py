"""
Unit tests for AppSettings, the user .env helper and the doctor command.
"""

from pathlib import Path

from typer.testing import CliRunner

from adapters import report_exporter
from cli.main import app
from core.config import MAX_ATTACHMENT_BYTES, AppSettings, write_user_env_vars
from core.domain.language import Language


def test_defaults(tmp_path):
    settings = AppSettings()

    assert settings.max_attachment_bytes == MAX_ATTACHMENT_BYTES == 5 * 1024 * 1024
    assert settings.default_language is Language.SPANISH
    assert settings.event_title == "EVENTO EMMARK"
    assert settings.resolved_storage_file() == tmp_path / "data" / "storage.json"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("EMMARK_STORAGE_FILE", str(tmp_path / "otro.json"))
    monkeypatch.setenv("EMMARK_DEFAULT_LANGUAGE", "en")

    settings = AppSettings()

    assert settings.resolved_storage_file() == tmp_path / "otro.json"
    assert settings.default_language is Language.ENGLISH


def test_project_env_file(tmp_path):
    Path(".env").write_text("EMMARK_EVENT_TITLE=Boda Ana y Luis\n", encoding="utf-8")

    assert AppSettings().event_title == "Boda Ana y Luis"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"EMMARK_EVENT_TITLE": "Uno", "EMMARK_LOG_LEVEL": "INFO"}, env_path=env_path)

    write_user_env_vars({"EMMARK_EVENT_TITLE": "Dos"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert "EMMARK_EVENT_TITLE=Dos" in lines
    assert "EMMARK_LOG_LEVEL=INFO" in lines


def test_doctor_reports_checks(monkeypatch):
    monkeypatch.setattr(report_exporter, "_write_pdf", lambda html, path: path.write_bytes(b"%PDF"))

    result = CliRunner().invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Local storage" in result.output
    assert "FAIL" not in result.output
