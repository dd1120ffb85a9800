"""Interpretación de planes generados por el LLM."""

from .parser import PlanParser

__all__ = ["PlanParser"]
