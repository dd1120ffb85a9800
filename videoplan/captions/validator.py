"""
Validador de tracks de subtítulos.
Verifica orden, superposición y texto vacío.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..domain.models import CaptionData

logger = logging.getLogger(__name__)


@dataclass
class CaptionValidationResult:
    """Resultado de la validación de un track."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self):
        return self.is_valid


def validate_captions(captions: Sequence[CaptionData]) -> CaptionValidationResult:
    """
    Valida la consistencia temporal y de contenido de un track.

    Los mensajes usan numeración desde 1, como se muestran al usuario.

    Args:
        captions: Track de subtítulos en orden

    Returns:
        CaptionValidationResult con los errores encontrados
    """
    errors = []

    for i, caption in enumerate(captions):
        number = i + 1

        if caption.start_time >= caption.end_time:
            errors.append(f"Subtítulo {number}: el inicio debe ser anterior al final")

        if i < len(captions) - 1:
            next_caption = captions[i + 1]
            if caption.end_time > next_caption.start_time:
                errors.append(f"Subtítulo {number}: se superpone con el siguiente")

        if not caption.text.strip():
            errors.append(f"Subtítulo {number}: texto vacío")

    if errors:
        logger.debug(f"Track de subtítulos inválido: {len(errors)} errores")

    return CaptionValidationResult(is_valid=not errors, errors=errors)
