"""
Utilidades sobre tracks de subtítulos: búsqueda por tiempo, estilos y exportación.
"""

from typing import Literal, Optional, Sequence

from ..domain.models import CaptionData
from ..presets import CAPTION_STYLES, DEFAULT_CAPTION_STYLE, CaptionStyle
from .codec import serialize_srt

Platform = Literal["tiktok", "youtube", "instagram"]

BURNED_IN_NOTICE = "Captions are burned into video"


def caption_at_time(captions: Sequence[CaptionData], time: float) -> Optional[CaptionData]:
    """Devuelve el subtítulo activo en `time` (start <= time < end) o None."""
    for caption in captions:
        if caption.start_time <= time < caption.end_time:
            return caption
    return None


def caption_style_for(caption: CaptionData) -> CaptionStyle:
    """Preset de estilo del subtítulo (TikTok por defecto)."""
    return CAPTION_STYLES[caption.style or DEFAULT_CAPTION_STYLE]


def export_captions_for_platform(captions: Sequence[CaptionData], platform: Platform) -> str:
    """
    Exporta el track para una plataforma.

    TikTok e Instagram usan subtítulos quemados en el video;
    YouTube (y cualquier otra) recibe SRT.
    """
    if platform in ("tiktok", "instagram"):
        return BURNED_IN_NOTICE
    return serialize_srt(captions)
