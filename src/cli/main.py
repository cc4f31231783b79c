"""CLI principal (Typer).

Por qué Typer + Rich:
- Comandos tipados (Enum para tipo/estado de actividad) sin parseo manual.
- La presentación (tablas/paneles) vive en `ui_components`; aquí solo se
  orquesta: abrir sesión, ejecutar comando, persistir, mostrar.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.json_exporter import export_state_json
from adapters.local_storage import JsonFileStorage
from adapters.report_exporter import DEFAULT_REPORT_NAME, export_report_html, export_report_pdf
from adapters.repository import write_attachment
from cli import doctor
from cli.ui_components import (
    build_activities_table,
    build_clients_table,
    build_stats_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import EmmarkError, ReportGenerationError
from core.domain.language import Language
from core.domain.models import ActivityStatus, ActivityType, Client
from core.services import event_state
from core.services.event_session import EventSession


app = typer.Typer(no_args_is_help=True, help="EVENTO EMMARK: clientes, actividades y reportes del evento.")
clients_app = typer.Typer(no_args_is_help=True, help="Lista de invitados y confirmaciones.")
activities_app = typer.Typer(no_args_is_help=True, help="Planificación, costos y seguimiento.")
app.add_typer(clients_app, name="clients")
app.add_typer(activities_app, name="activities")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)


@dataclass
class CliContext:
    settings: AppSettings
    storage_file: Path
    language: Language

    def open_session(self) -> EventSession:
        return EventSession.open(JsonFileStorage(self.storage_file))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=False, show_path=False)],
        force=True,
    )


@contextmanager
def _errors_as_exit() -> Iterator[None]:
    try:
        yield
    except EmmarkError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _ctx(ctx: typer.Context) -> CliContext:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    storage_file: Optional[Path] = typer.Option(
        None,
        "--storage-file",
        help="Archivo de almacenamiento local (por defecto <data_dir>/storage.json).",
    ),
    english: bool = typer.Option(False, "--english", help="Salida en inglés."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logging detallado."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    language = Language.ENGLISH if english else settings.default_language
    ctx.obj = CliContext(
        settings=settings,
        storage_file=storage_file or settings.resolved_storage_file(),
        language=language,
    )


# --- Clientes -----------------------------------------------------------------


@clients_app.command("list")
def clients_list(ctx: typer.Context) -> None:
    """Muestra los clientes registrados."""

    session = _ctx(ctx).open_session()
    if not session.state.clients:
        _console.print("[dim]No hay clientes registrados.[/dim]")
        return
    _console.print(build_clients_table(session.state.clients))


@clients_app.command("add")
def clients_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre del cliente."),
    branch: str = typer.Option("", "--branch", "-b", help="Sucursal."),
    phone: str = typer.Option("", "--phone", "-p", help="Teléfono."),
    confirmed: bool = typer.Option(False, "--confirmed", help="Cliente confirmado."),
) -> None:
    """Agrega un cliente nuevo."""

    if not name.strip():
        raise typer.BadParameter("el nombre es obligatorio")
    with _errors_as_exit():
        session = _ctx(ctx).open_session()
        client = session.add_client(Client(name=name, branch=branch, phone=phone, is_confirmed=confirmed))
    _console.print(f"[green]Cliente agregado:[/green] {client.name} ({client.id})")


@clients_app.command("edit")
def clients_edit(
    ctx: typer.Context,
    client_id: str = typer.Argument(..., help="ID del cliente."),
    name: Optional[str] = typer.Option(None, "--name", help="Nuevo nombre."),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Nueva sucursal."),
    phone: Optional[str] = typer.Option(None, "--phone", "-p", help="Nuevo teléfono."),
    confirmed: Optional[bool] = typer.Option(None, "--confirmed/--pending", help="Estado de confirmación."),
) -> None:
    """Edita un cliente (reemplazo completo por ID)."""

    with _errors_as_exit():
        session = _ctx(ctx).open_session()
        current = event_state.find_client(session.state, client_id)
        if current is None:
            _console.print(f"[yellow]Cliente no encontrado:[/yellow] {client_id}")
            return
        updates = {"name": name, "branch": branch, "phone": phone, "is_confirmed": confirmed}
        data = current.model_dump()
        data.update({k: v for k, v in updates.items() if v is not None})
        try:
            client = Client.model_validate(data)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        session.update_client(client)
    _console.print(f"[green]Cliente actualizado:[/green] {client_id}")


@clients_app.command("confirm")
def clients_confirm(
    ctx: typer.Context,
    client_id: str = typer.Argument(..., help="ID del cliente."),
) -> None:
    """Alterna la confirmación de asistencia."""

    with _errors_as_exit():
        client = _ctx(ctx).open_session().toggle_confirmation(client_id)
    if client is None:
        _console.print(f"[yellow]Cliente no encontrado:[/yellow] {client_id}")
        return
    label = "Confirmado" if client.is_confirmed else "No Confirmado"
    _console.print(f"{client.name}: [bold]{label}[/bold]")


@clients_app.command("delete")
def clients_delete(
    ctx: typer.Context,
    client_id: str = typer.Argument(..., help="ID del cliente."),
    yes: bool = typer.Option(False, "--yes", "-y", help="No pedir confirmación."),
) -> None:
    """Elimina un cliente (pide confirmación)."""

    confirmed = yes or typer.confirm("¿Estás seguro de eliminar este cliente?")
    if not confirmed:
        _console.print("[dim]Cancelado.[/dim]")
        return
    with _errors_as_exit():
        _ctx(ctx).open_session().delete_client(client_id, confirmed=True)
    _console.print(f"[green]Cliente eliminado:[/green] {client_id}")


# --- Actividades --------------------------------------------------------------


@activities_app.command("list")
def activities_list(ctx: typer.Context) -> None:
    """Muestra las actividades del evento."""

    cli = _ctx(ctx)
    session = cli.open_session()
    if not session.state.activities:
        _console.print("[dim]No hay actividades registradas.[/dim]")
        return
    _console.print(build_activities_table(session.state.activities, cli.settings.currency_symbol))


@activities_app.command("add")
def activities_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre de la actividad."),
    date: str = typer.Option("", "--date", "-d", help="Fecha (YYYY-MM-DD)."),
    cost: str = typer.Option("0", "--cost", "-c", help="Costo (no negativo)."),
    in_charge: str = typer.Option("", "--in-charge", "-e", help="Encargado."),
    activity_type: ActivityType = typer.Option(ActivityType.LOGISTICA, "--type", "-t", help="Tipo."),
    status: ActivityStatus = typer.Option(ActivityStatus.PENDIENTE, "--status", "-s", help="Estado."),
    attach: Optional[Path] = typer.Option(None, "--attach", "-a", help="Archivo adjunto (máx. 5MB)."),
) -> None:
    """Agrega una actividad nueva (opcionalmente con adjunto)."""

    if not name.strip():
        raise typer.BadParameter("el nombre es obligatorio")
    cli = _ctx(ctx)
    with _errors_as_exit():
        session = cli.open_session()
        try:
            activity = asyncio.run(
                session.create_activity(
                    name=name,
                    date=date,
                    cost=cost,
                    in_charge=in_charge,
                    activity_type=activity_type,
                    status=status,
                    attachment_path=attach,
                    max_attachment_bytes=cli.settings.max_attachment_bytes,
                )
            )
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    _console.print(f"[green]Actividad agregada:[/green] {activity.name} ({activity.id})")


@activities_app.command("status")
def activities_status(
    ctx: typer.Context,
    activity_id: str = typer.Argument(..., help="ID de la actividad."),
    status: ActivityStatus = typer.Argument(..., help="Nuevo estado."),
) -> None:
    """Cambia el estado de una actividad."""

    with _errors_as_exit():
        activity = _ctx(ctx).open_session().set_activity_status(activity_id, status)
    if activity is None:
        _console.print(f"[yellow]Actividad no encontrada:[/yellow] {activity_id}")
        return
    _console.print(f"{activity.name}: [bold]{activity.status.value}[/bold]")


@activities_app.command("delete")
def activities_delete(
    ctx: typer.Context,
    activity_id: str = typer.Argument(..., help="ID de la actividad."),
    yes: bool = typer.Option(False, "--yes", "-y", help="No pedir confirmación."),
) -> None:
    """Elimina una actividad (pide confirmación)."""

    confirmed = yes or typer.confirm("¿Estás seguro de eliminar esta actividad?")
    if not confirmed:
        _console.print("[dim]Cancelado.[/dim]")
        return
    with _errors_as_exit():
        _ctx(ctx).open_session().delete_activity(activity_id, confirmed=True)
    _console.print(f"[green]Actividad eliminada:[/green] {activity_id}")


@activities_app.command("attachment")
def activities_attachment(
    ctx: typer.Context,
    activity_id: str = typer.Argument(..., help="ID de la actividad."),
    output_dir: Path = typer.Option(Path("."), "--output-dir", "-o", help="Directorio destino."),
) -> None:
    """Descarga el adjunto de una actividad."""

    with _errors_as_exit():
        activity = event_state.find_activity(_ctx(ctx).open_session().state, activity_id)
        if activity is None or activity.attachment is None:
            _console.print(f"[yellow]Sin adjunto:[/yellow] {activity_id}")
            raise typer.Exit(code=1)
        path = write_attachment(activity.attachment, output_dir)
    _console.print(f"[green]Adjunto guardado en:[/green] {path}")


# --- Panel y reportes ---------------------------------------------------------


@app.command()
def dashboard(ctx: typer.Context) -> None:
    """Panel de proceso: estadísticas, estados y costos por tipo."""

    cli = _ctx(ctx)
    session = cli.open_session()
    print_banner(_console)
    _console.print(build_stats_panel(session.dashboard(), cli.language, cli.settings.currency_symbol))


@app.command()
def report(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Ruta del archivo de salida."),
    html: bool = typer.Option(False, "--html", help="Exportar HTML en lugar de PDF."),
) -> None:
    """Exporta el reporte del evento (PDF, con fallback a HTML)."""

    cli = _ctx(ctx)
    settings = cli.settings
    pdf_path = output or (settings.reports_dir / DEFAULT_REPORT_NAME)
    html_path = pdf_path.with_suffix(".html")
    kwargs = {
        "language": cli.language,
        "title": settings.event_title,
        "currency_symbol": settings.currency_symbol,
    }

    with _errors_as_exit():
        state = cli.open_session().state
        if html:
            path = export_report_html(state=state, output_path=html_path, **kwargs)
        else:
            try:
                path = export_report_pdf(state=state, output_path=pdf_path, **kwargs)
            except ReportGenerationError as exc:
                logger.warning("PDF no disponible (%s); se exporta HTML", exc)
                _console.print(f"[yellow]PDF no disponible:[/yellow] {exc}")
                path = export_report_html(state=state, output_path=html_path, **kwargs)
    _console.print(f"[green]Reporte exportado:[/green] {path}")


@app.command("export-json")
def export_json(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Archivo JSON de respaldo."),
) -> None:
    """Respaldo JSON de clientes y actividades."""

    with _errors_as_exit():
        state = _ctx(ctx).open_session().state
        path = export_state_json(state=state, output_path=output)
    _console.print(f"[green]Respaldo guardado en:[/green] {path}")


def run() -> None:
    app()
