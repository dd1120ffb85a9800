"""
Presets inmutables: relaciones de aspecto por plataforma y estilos de subtítulos.
Se cargan una sola vez al importar el módulo y no se modifican después.
"""
from types import MappingProxyType
from typing import Literal, Mapping, Tuple

from pydantic import BaseModel, ConfigDict

from .domain.models import Resolution


class AspectRatioPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    label: str
    platforms: Tuple[str, ...]


class CaptionStyle(BaseModel):
    """Estilo visual de subtítulos para el renderizador."""
    model_config = ConfigDict(frozen=True)

    font_size: int
    font_weight: int
    text_transform: Literal["none", "uppercase"]
    color: str
    stroke: str
    stroke_width: int
    text_align: Literal["left", "center", "right"]
    background_color: str
    padding: int
    letter_spacing: int
    word_highlight: bool


ASPECT_RATIOS: Mapping[str, AspectRatioPreset] = MappingProxyType({
    "landscape": AspectRatioPreset(
        width=1920, height=1080, label="Landscape (16:9)",
        platforms=("YouTube", "LinkedIn"),
    ),
    "portrait": AspectRatioPreset(
        width=1080, height=1920, label="Portrait (9:16)",
        platforms=("TikTok", "Instagram Reels", "YouTube Shorts"),
    ),
    "square": AspectRatioPreset(
        width=1080, height=1080, label="Square (1:1)",
        platforms=("Instagram Feed", "Facebook"),
    ),
})

CAPTION_STYLES: Mapping[str, CaptionStyle] = MappingProxyType({
    # Estilo TikTok: mayúsculas, contorno grueso, resaltado por palabra
    "tiktok": CaptionStyle(
        font_size=48, font_weight=900, text_transform="uppercase",
        color="#ffffff", stroke="#000000", stroke_width=8, text_align="center",
        background_color="transparent", padding=20, letter_spacing=2,
        word_highlight=True,
    ),
    "simple": CaptionStyle(
        font_size=36, font_weight=700, text_transform="none",
        color="#ffffff", stroke="transparent", stroke_width=0, text_align="center",
        background_color="rgba(0, 0, 0, 0.7)", padding=16, letter_spacing=0,
        word_highlight=False,
    ),
    "minimal": CaptionStyle(
        font_size=32, font_weight=600, text_transform="none",
        color="#ffffff", stroke="transparent", stroke_width=0, text_align="center",
        background_color="transparent", padding=12, letter_spacing=0,
        word_highlight=False,
    ),
})

DEFAULT_CAPTION_STYLE = "tiktok"


def resolution_for_aspect_ratio(aspect_ratio: str) -> Resolution:
    """
    Devuelve la resolución objetivo para una relación de aspecto.

    Raises:
        KeyError: Si la relación de aspecto no existe
    """
    preset = ASPECT_RATIOS[aspect_ratio]
    return Resolution(width=preset.width, height=preset.height)
