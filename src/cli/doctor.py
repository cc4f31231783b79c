"""Doctor command for environment diagnostics."""

from __future__ import annotations

import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.local_storage import JsonFileStorage
from adapters.report_exporter import export_report_pdf
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import EmmarkError
from core.domain.language import Language
from core.domain.models import EventState

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_storage(path: Path) -> tuple[bool, str]:
    """Verify the storage file can be written (round trip on a probe key)."""

    storage = JsonFileStorage(path)
    try:
        storage.set_item("_emmark_doctor", "ok")
        ok = storage.get_item("_emmark_doctor") == "ok"
        storage.remove_item("_emmark_doctor")
    except EmmarkError as exc:
        return False, str(exc)
    return ok, str(path)


def _check_pdf() -> tuple[bool, str]:
    """Attempt to generate a minimal PDF to detect WeasyPrint issues."""

    with tempfile.TemporaryDirectory() as tmp:
        try:
            export_report_pdf(state=EventState(), output_path=Path(tmp) / "_doctor_test.pdf")
        except EmmarkError as exc:
            return False, str(exc)
    return True, "OK"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="EMMARK Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Language", "OK", settings.default_language.label())
    table.add_row("Attachment limit", "OK", f"{settings.max_attachment_bytes} bytes")

    ok_storage, detail_storage = _check_storage(settings.resolved_storage_file())
    table.add_row("Local storage", "OK" if ok_storage else "FAIL", detail_storage)

    ok_pdf, detail_pdf = _check_pdf()
    table.add_row("WeasyPrint PDF", "OK" if ok_pdf else "FAIL", detail_pdf)

    _console.print(table)

    if not ok_pdf:
        _console.print(
            "\n[yellow]Note:[/yellow] When PDF export fails, `report` automatically falls back to HTML."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    title = typer.prompt("Event title", default=settings.event_title, show_default=True).strip()
    data_dir = typer.prompt("Data directory", default=str(settings.data_dir), show_default=True).strip()
    language = typer.prompt(
        "Language (es/en)",
        default=settings.default_language.value,
        show_default=True,
    ).strip().lower()

    if not title or not data_dir:
        raise typer.BadParameter("title and data directory are required")
    try:
        Language(language)
    except ValueError as exc:
        raise typer.BadParameter("language must be 'es' or 'en'") from exc

    env_path = write_user_env_vars(
        {
            "EMMARK_EVENT_TITLE": title,
            "EMMARK_DATA_DIR": data_dir,
            "EMMARK_DEFAULT_LANGUAGE": language,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
