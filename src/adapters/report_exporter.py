"""Exportación de reportes.

Por qué está en adapters:
- PDF/HTML son detalles de infraestructura (WeasyPrint/Jinja2).
- El Core solo conoce el `EventState` y el `Dashboard` calculado.

Estructura fija del documento: título con fecha, caja de resumen, tabla de
clientes y tabla de actividades (ver `templates/report.html`).
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Callable

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from core.domain.errors import ReportGenerationError
from core.domain.language import Language, labels_for
from core.domain.models import EventState
from core.services.stats import Dashboard, build_dashboard


logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

DEFAULT_REPORT_NAME = "evento-emmark-reporte.pdf"

_DATE_FORMATS = {
    Language.SPANISH: "%d/%m/%Y",
    Language.ENGLISH: "%m/%d/%Y",
}


def format_amount(value: float, *, grouped: bool = False) -> str:
    """Monto sin decimales superfluos (`150`, `99.5`), opcionalmente con miles."""

    if float(value).is_integer():
        return f"{int(value):,}" if grouped else str(int(value))
    return f"{value:,}" if grouped else str(value)


def format_report_date(day: date, language: Language) -> str:
    return day.strftime(_DATE_FORMATS[language])


def _get_env(currency_symbol: str) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )

    def currency(value: float, grouped: bool = False) -> str:
        return f"{currency_symbol}{format_amount(value, grouped=grouped)}"

    def percentage(value: int) -> str:
        return f"{value}%"

    env.filters["currency"] = currency
    env.filters["percentage"] = percentage
    return env


def render_report_html(
    *,
    state: EventState,
    dashboard: Dashboard | None = None,
    language: Language = Language.SPANISH,
    title: str = "EVENTO EMMARK",
    currency_symbol: str = "$",
    today: date | None = None,
) -> str:
    """Renderiza un HTML autocontenido para el reporte."""

    dashboard = dashboard or build_dashboard(state)
    labels = labels_for(language)
    try:
        template = _get_env(currency_symbol).get_template("report.html")
        return template.render(
            title=title,
            generated_on=format_report_date(today or date.today(), language),
            labels=labels,
            stats=dashboard.stats,
            status=dashboard.status,
            costs=dashboard.costs,
            clients=state.clients,
            activities=state.activities,
            lang=language.value,
        )
    except TemplateError as exc:
        raise ReportGenerationError(f"No se pudo renderizar el reporte: {exc}") from exc


def _write_pdf(html: str, output_path: Path) -> None:
    # Import diferido: WeasyPrint necesita librerías nativas (Pango/Cairo).
    from weasyprint import HTML  # noqa: PLC0415

    HTML(string=html, base_url=str(_TEMPLATES_DIR)).write_pdf(str(output_path))


def _write_html(html: str, output_path: Path) -> None:
    output_path.write_text(html, encoding="utf-8")


def _discard(tmp_path: Path | None) -> None:
    if tmp_path is not None:
        tmp_path.unlink(missing_ok=True)


def _atomic_export(html: str, output_path: Path, writer: Callable[[str, Path], None]) -> Path:
    """Escribe en un temporal y lo mueve al destino; si falla no queda archivo."""

    tmp_path: Path | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", dir=str(output_path.parent))
        os.close(fd)
        tmp_path = Path(tmp_name)
        writer(html, tmp_path)
        os.replace(tmp_path, output_path)
    except ReportGenerationError:
        _discard(tmp_path)
        raise
    except Exception as exc:
        _discard(tmp_path)
        raise ReportGenerationError(f"Error al generar el reporte: {exc}") from exc
    logger.info("Reporte exportado en %s", output_path)
    return output_path


def export_report_html(
    *,
    state: EventState,
    output_path: Path,
    language: Language = Language.SPANISH,
    title: str = "EVENTO EMMARK",
    currency_symbol: str = "$",
) -> Path:
    """Exporta el reporte como HTML.

    Sirve como fallback cuando el render PDF no está soportado por el entorno.
    """

    html = render_report_html(state=state, language=language, title=title, currency_symbol=currency_symbol)
    return _atomic_export(html, output_path, _write_html)


def export_report_pdf(
    *,
    state: EventState,
    output_path: Path,
    language: Language = Language.SPANISH,
    title: str = "EVENTO EMMARK",
    currency_symbol: str = "$",
) -> Path:
    """Exporta el reporte como PDF.

    Sincrónico y de una sola pasada: WeasyPrint es CPU/IO local.
    """

    html = render_report_html(state=state, language=language, title=title, currency_symbol=currency_symbol)
    return _atomic_export(html, output_path, _write_pdf)
