"""Módulo de assets: extracción, generación, inyección y validación de imágenes."""

from .generation import (
    AssetGenerationCoordinator,
    AssetGenerator,
    AssetResult,
    AssetStatus,
    CancellationToken,
    GenerationReport,
)
from .injector import inject_image_urls
from .readiness import RenderReadiness, validate_images_for_rendering, validate_plan_for_rendering
from .requirements import extract_image_requirements

__all__ = [
    "AssetGenerationCoordinator",
    "AssetGenerator",
    "AssetResult",
    "AssetStatus",
    "CancellationToken",
    "GenerationReport",
    "inject_image_urls",
    "RenderReadiness",
    "validate_images_for_rendering",
    "validate_plan_for_rendering",
    "extract_image_requirements",
]
