"""Language utilities for EMMARK.

Centralizes the language options for user-facing output (report and
console labels). The stored data itself is language-neutral: enum values
are persisted exactly as the original Spanish literals.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    SPANISH = "es"
    ENGLISH = "en"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.SPANISH

    def label(self) -> str:
        return "Español" if self is Language.SPANISH else "English"


_LABELS: dict[Language, dict[str, str]] = {
    Language.SPANISH: {
        "report_subtitle": "Reporte de Proceso",
        "total_clients": "Total Clientes",
        "confirmed": "Confirmados",
        "total_cost": "Costo Total",
        "progress": "Progreso Actividades",
        "clients_title": "Lista de Clientes",
        "activities_title": "Detalle de Actividades",
        "col_name": "Nombre",
        "col_branch": "Sucursal",
        "col_phone": "Teléfono",
        "col_state": "Estado",
        "col_activity": "Actividad",
        "col_date": "Fecha",
        "col_in_charge": "Encargado",
        "col_type": "Tipo",
        "col_cost": "Costo",
        "client_confirmed": "CONFIRMADO",
        "client_pending": "PENDIENTE",
        "no_clients": "No hay clientes registrados.",
        "no_activities": "No hay actividades registradas",
        "no_costs": "No hay costos registrados",
        "status_chart": "Estado de Actividades",
        "cost_chart": "Costos por Tipo",
        "total_activities": "Actividades Totales",
    },
    Language.ENGLISH: {
        "report_subtitle": "Progress Report",
        "total_clients": "Total Clients",
        "confirmed": "Confirmed",
        "total_cost": "Total Cost",
        "progress": "Activity Progress",
        "clients_title": "Client List",
        "activities_title": "Activity Detail",
        "col_name": "Name",
        "col_branch": "Branch",
        "col_phone": "Phone",
        "col_state": "Status",
        "col_activity": "Activity",
        "col_date": "Date",
        "col_in_charge": "In charge",
        "col_type": "Type",
        "col_cost": "Cost",
        "client_confirmed": "CONFIRMADO",
        "client_pending": "PENDIENTE",
        "no_clients": "No clients registered.",
        "no_activities": "No activities registered",
        "no_costs": "No costs registered",
        "status_chart": "Activity Status",
        "cost_chart": "Cost by Type",
        "total_activities": "Total Activities",
    },
}


def labels_for(language: Language) -> dict[str, str]:
    """Label set for a language (report headers, table columns, notices)."""

    return _LABELS[language]
