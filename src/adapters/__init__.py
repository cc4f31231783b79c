"""Adaptadores de infraestructura: almacenamiento local, repositorio y exportadores."""
