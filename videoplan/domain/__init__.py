"""Modelos de dominio del plan de video."""
