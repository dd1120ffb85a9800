"""
Validador de preparación para render.
Confirma que cada imagen del plan tiene una fuente utilizable.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..domain.models import Element, ImageElement, VideoPlan
from .urls import image_source, is_well_formed_url

logger = logging.getLogger(__name__)


@dataclass
class RenderReadiness:
    """Resultado de la validación previa al render."""
    valid: bool
    missing_images: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)

    def __bool__(self):
        return self.valid


def validate_images_for_rendering(elements: Sequence[Element]) -> RenderReadiness:
    """
    Revisa las imágenes de una lista de elementos.

    Una imagen sin fuente se reporta en `missing_images`; una fuente que no es
    una URL bien formada se reporta solo como problema en `issues`.

    Args:
        elements: Elementos (normalmente después de inyectar URLs)

    Returns:
        RenderReadiness con imágenes faltantes y problemas encontrados
    """
    missing_images = []
    issues = []

    for element in elements:
        if not isinstance(element, ImageElement):
            continue

        source = image_source(element)
        if source is None:
            missing_images.append(element.id)
            issues.append(f'El elemento de imagen "{element.id}" no tiene URL ni fuente')
        elif not is_well_formed_url(source):
            issues.append(f'El elemento de imagen "{element.id}" tiene un formato de URL inválido')

    return RenderReadiness(
        valid=not missing_images and not issues,
        missing_images=missing_images,
        issues=issues,
    )


def validate_plan_for_rendering(plan: VideoPlan) -> RenderReadiness:
    """Valida todas las escenas del plan y agrega los resultados."""
    missing_images = []
    issues = []

    for index, scene in enumerate(plan.scenes):
        result = validate_images_for_rendering(scene.elements)
        missing_images.extend(result.missing_images)
        issues.extend(f"Escena {index + 1}: {issue}" for issue in result.issues)

    if missing_images:
        logger.warning(f"Plan {plan.id}: {len(missing_images)} imágenes sin fuente")

    return RenderReadiness(
        valid=not missing_images and not issues,
        missing_images=missing_images,
        issues=issues,
    )
