"""
Segmentador de subtítulos a partir del texto de narración.
Reparte el texto en bloques de pocas palabras (estilo TikTok) a lo largo de la duración.
"""

import logging
from typing import List

from ..domain.models import CaptionData, VideoPlan

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PER_CAPTION = 4
# Ritmo medio de locución; documenta la suposición de la heurística
DEFAULT_WORDS_PER_SECOND = 2.5


def generate_captions_from_text(
    text: str,
    duration: float,
    words_per_caption: int = DEFAULT_WORDS_PER_CAPTION,
    words_per_second: float = DEFAULT_WORDS_PER_SECOND,
) -> List[CaptionData]:
    """
    Genera subtítulos temporizados desde el texto de narración.

    Cada bloque de `words_per_caption` palabras recibe el mismo tiempo;
    el reloj avanza hasta el final de cada bloque, por lo que el track
    nunca se superpone y el último subtítulo no pasa de `duration`.

    Args:
        text: Texto de narración
        duration: Duración total en segundos (> 0)
        words_per_caption: Palabras por subtítulo
        words_per_second: Ritmo de locución supuesto (no se usa en el cálculo)

    Returns:
        Lista de subtítulos (vacía si el texto no tiene palabras)
    """
    if duration <= 0:
        raise ValueError(f"La duración debe ser positiva (recibido {duration})")
    if words_per_caption < 1:
        raise ValueError(f"words_per_caption debe ser >= 1 (recibido {words_per_caption})")

    words = text.split()
    if not words:
        return []

    time_per_caption = (duration / len(words)) * words_per_caption
    estimated = len(words) / words_per_second
    if abs(estimated - duration) > duration * 0.5:
        logger.debug(
            f"La narración ({len(words)} palabras, ~{estimated:.1f}s) no encaja "
            f"con la duración objetivo ({duration:.1f}s)"
        )

    captions = []
    current_time = 0.0
    for i in range(0, len(words), words_per_caption):
        end_time = min(current_time + time_per_caption, duration)
        captions.append(CaptionData(
            start_time=current_time,
            end_time=end_time,
            text=" ".join(words[i:i + words_per_caption]),
        ))
        current_time = end_time

    return captions


def generate_plan_captions(
    plan: VideoPlan,
    words_per_caption: int = DEFAULT_WORDS_PER_CAPTION,
) -> List[CaptionData]:
    """
    Genera el track completo del plan a partir del voiceover de cada escena.

    Cada escena se segmenta dentro de su propio intervalo; si una escena se
    solapa con la anterior, su track empieza donde terminó el anterior.
    """
    captions: List[CaptionData] = []
    last_end = 0.0

    for index, scene in enumerate(plan.scenes):
        if not scene.voiceover or not scene.voiceover.strip():
            continue
        offset = max(scene.start_time, last_end)
        available = scene.end_time - offset
        if available <= 0:
            logger.warning(f"Escena {index + 1}: sin tiempo libre para subtítulos, se omite")
            continue

        for caption in generate_captions_from_text(scene.voiceover, available, words_per_caption):
            captions.append(caption.model_copy(update={
                "start_time": caption.start_time + offset,
                "end_time": caption.end_time + offset,
            }))
        last_end = captions[-1].end_time

    return captions
