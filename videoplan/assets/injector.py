"""
Inyector de URLs generadas en los elementos del plan.
"""

from typing import List, Mapping, Sequence

from ..domain.models import Element, ImageElement


def inject_image_urls(
    elements: Sequence[Element],
    url_map: Mapping[str, str],
) -> List[Element]:
    """
    Devuelve elementos nuevos con las URLs generadas aplicadas.

    La URL se escribe en `content` (principal) y en `src` (respaldo, se
    serializa como `style.src`). Los demás elementos se copian sin cambios.
    Es idempotente: aplicarla dos veces con el mismo mapa da el mismo resultado.

    Args:
        elements: Elementos de una escena
        url_map: asset_id -> URL generada

    Returns:
        Nueva lista de elementos; la entrada no se modifica
    """
    updated = []
    for element in elements:
        if isinstance(element, ImageElement) and element.id in url_map:
            url = url_map[element.id]
            updated.append(element.model_copy(update={"content": url, "src": url}, deep=True))
        else:
            updated.append(element.model_copy(deep=True))
    return updated
