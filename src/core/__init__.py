"""Core: dominio, configuración y servicios."""
