"""
Extractor de requerimientos de assets.
Detecta qué imágenes de una escena todavía necesitan generarse.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..domain.models import (
    AssetRequirement,
    AssetSpecification,
    Element,
    ImageElement,
)
from .urls import has_image_source

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Generated image"
DEFAULT_IMAGE_SIZE = 1024
DEFAULT_IMAGE_STYLE = "photorealistic"


def _dimension(value: Optional[float]) -> int:
    # Tamaños nulos, negativos o menores a 1px usan el valor por defecto
    size = int(value or 0)
    return size if size >= 1 else DEFAULT_IMAGE_SIZE


def _inline_requirement(element: ImageElement) -> AssetRequirement:
    width = _dimension(element.size.width if element.size else None)
    height = _dimension(element.size.height if element.size else None)
    return AssetRequirement(
        id=element.id,
        type="image",
        description=element.content or DEFAULT_DESCRIPTION,
        specifications=AssetSpecification(
            width=width,
            height=height,
            style=element.image_style or DEFAULT_IMAGE_STYLE,
        ),
        provided_by_user=False,
    )


def extract_image_requirements(
    elements: Sequence[Element],
    required_assets: Optional[Sequence[AssetRequirement]] = None,
) -> List[AssetRequirement]:
    """
    Extrae los requerimientos de imagen de los elementos de una escena.

    Las imágenes que ya tienen fuente se omiten. Si el plan declara el asset
    en `required_assets` (mismo id), su descripción y especificación tienen
    prioridad; si lo marca como provisto por el usuario, no se genera.

    Args:
        elements: Elementos de la escena, en orden
        required_assets: Assets declarados a nivel de plan (opcional)

    Returns:
        Requerimientos en el mismo orden que los elementos
    """
    declared: Dict[str, AssetRequirement] = {
        asset.id: asset for asset in (required_assets or [])
    }
    requirements = []

    for element in elements:
        if not isinstance(element, ImageElement):
            continue
        if has_image_source(element):
            continue

        planned = declared.get(element.id)
        if planned is None:
            requirements.append(_inline_requirement(element))
        elif planned.provided_by_user:
            logger.debug(f"Asset {element.id} provisto por el usuario, no se genera")
        else:
            requirements.append(planned)

    return requirements
