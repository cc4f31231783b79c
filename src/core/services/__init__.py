"""Servicios del Core: comandos de estado, sesión y estadísticas."""
