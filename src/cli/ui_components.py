"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.report_exporter import format_amount
from core.domain.language import Language, labels_for
from core.domain.models import Activity, ActivityStatus, Client
from core.services.stats import CostGroup, Dashboard, StatusBucket


_STATUS_STYLES: dict[ActivityStatus, str] = {
    ActivityStatus.PENDIENTE: "yellow",
    ActivityStatus.EN_PROCESO: "blue",
    ActivityStatus.FINALIZADA: "green",
}

_BAR_WIDTH = 30


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("EVENTO EMMARK", style="bold cyan")
    subtitle = Text("Organizador v1.0 • Los datos se guardan en este dispositivo", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_clients_table(clients: Sequence[Client]) -> Table:
    table = Table(title="Clientes")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Nombre", style="bold white")
    table.add_column("Sucursal", style="cyan")
    table.add_column("Teléfono", style="white")
    table.add_column("Estado")
    for c in clients:
        state = Text("Confirmado", style="green") if c.is_confirmed else Text("No Confirmado", style="dim")
        table.add_row(c.id, c.name, c.branch or "Sin sucursal", c.phone or "N/A", state)
    return table


def build_activities_table(activities: Sequence[Activity], currency_symbol: str = "$") -> Table:
    table = Table(title="Actividades del Evento")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Actividad", style="bold white")
    table.add_column("Tipo", style="magenta")
    table.add_column("Fecha")
    table.add_column("Costo", justify="right")
    table.add_column("Encargado")
    table.add_column("Estado")
    table.add_column("Adjunto", style="dim")
    for a in activities:
        table.add_row(
            a.id,
            a.name,
            a.activity_type.value,
            a.date or "Sin fecha",
            f"{currency_symbol}{format_amount(a.cost, grouped=True)}",
            a.in_charge,
            Text(a.status.value, style=_STATUS_STYLES[a.status]),
            a.attachment.name if a.attachment else "-",
        )
    return table


def _bar(value: float, maximum: float) -> str:
    if maximum <= 0:
        return ""
    return "█" * max(1 if value > 0 else 0, round(value / maximum * _BAR_WIDTH))


def build_status_panel(buckets: Sequence[StatusBucket], language: Language = Language.SPANISH) -> Panel:
    labels = labels_for(language)
    total = sum(b.value for b in buckets)
    if not total:
        return Panel(Text(labels["no_activities"], style="dim"), title=labels["status_chart"])
    body = Text()
    for b in buckets:
        body.append(f"{b.name:<12} ", style="bold")
        body.append(_bar(b.value, total), style=b.color)
        body.append(f" {b.value}\n")
    return Panel(body, title=labels["status_chart"], border_style="blue")


def build_costs_panel(
    groups: Sequence[CostGroup],
    language: Language = Language.SPANISH,
    currency_symbol: str = "$",
) -> Panel:
    labels = labels_for(language)
    if not groups:
        return Panel(Text(labels["no_costs"], style="dim"), title=labels["cost_chart"])
    top = max(g.value for g in groups)
    body = Text()
    for g in groups:
        body.append(f"{g.name:<16} ", style="bold")
        body.append(_bar(g.value, top), style="#6366f1")
        body.append(f" {currency_symbol}{format_amount(g.value, grouped=True)}\n")
    return Panel(body, title=labels["cost_chart"], border_style="magenta")


def build_stats_panel(
    dashboard: Dashboard,
    language: Language = Language.SPANISH,
    currency_symbol: str = "$",
) -> Panel:
    """Tarjetas del panel de proceso + gráficos en texto."""

    labels = labels_for(language)
    s = dashboard.stats
    cards = Table.grid(expand=True, padding=(0, 2))
    for _ in range(4):
        cards.add_column()
    cards.add_row(
        Text(labels["confirmed"], style="dim"),
        Text(labels["progress"], style="dim"),
        Text(labels["total_cost"], style="dim"),
        Text(labels["total_activities"], style="dim"),
    )
    cards.add_row(
        Text(f"{s.confirmed_clients} / {s.total_clients} ({s.confirmation_rate}%)", style="bold"),
        Text(f"{s.progress}%", style="bold green"),
        Text(f"{currency_symbol}{format_amount(s.total_cost, grouped=True)}", style="bold"),
        Text(str(s.total_activities), style="bold"),
    )
    body = Group(
        cards,
        build_status_panel(dashboard.status, language),
        build_costs_panel(dashboard.costs, language, currency_symbol),
    )
    return Panel(body, title="Panel de Proceso", border_style="cyan")
