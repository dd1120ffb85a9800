"""
videoplan - Resolución de planes de video.

Convierte un plan declarativo (escenas con elementos tipados) en un plan listo
para render, generando las imágenes faltantes, y produce subtítulos SRT.
"""

from .domain.models import VideoPlan
from .orchestrator import PlanResolution, PlanResolver

__version__ = "0.1.0"

__all__ = ["VideoPlan", "PlanResolution", "PlanResolver", "__version__"]
