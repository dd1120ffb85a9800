"""
Modelos de Dominio
Definen el plan de video declarativo: escenas, elementos tipados, assets y subtítulos.

Los modelos son inmutables (frozen). Para "modificar" un plan se crea una copia
con model_copy(update=...), nunca se muta la instancia original.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

AspectRatio = Literal["landscape", "portrait", "square"]
AssetKind = Literal["image", "icon", "background", "video", "audio"]
CaptionStyleName = Literal["tiktok", "simple", "minimal"]

# Tolerancia para comparar tiempos en segundos
TIME_EPSILON = 1e-6


class PlanModel(BaseModel):
    """Base común: inmutable y con alias camelCase para el JSON del plan."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Position(PlanModel):
    x: float = 0.0
    y: float = 0.0
    z: float = Field(0.0, description="Orden de apilado")


class Size(PlanModel):
    width: float = 0.0
    height: float = 0.0


class _ElementBase(PlanModel):
    id: str
    content: str = ""
    position: Position = Field(default_factory=Position)
    size: Optional[Size] = None
    style: Dict[str, Any] = Field(default_factory=dict)


class TextElement(_ElementBase):
    type: Literal["text"] = "text"


class ShapeElement(_ElementBase):
    type: Literal["shape"] = "shape"


class VideoElement(_ElementBase):
    type: Literal["video"] = "video"


class Object3DElement(_ElementBase):
    type: Literal["3d-object"] = "3d-object"


class ImageElement(_ElementBase):
    """
    Elemento de imagen. Es el único tipo que participa en la resolución de assets.

    En el JSON del plan la fuente y el estilo de imagen viajan dentro del mapa
    `style` (`style.src`, `style.imageStyle`). Al validar se elevan a campos
    tipados y al serializar se vuelven a escribir en `style`.
    """
    type: Literal["image"] = "image"
    src: Optional[str] = None
    image_style: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_style_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        style = data.get("style")
        if not isinstance(style, dict):
            return data

        data = dict(data)
        rest = dict(style)
        # Solo un `src` de tipo string cuenta como fuente
        if isinstance(rest.get("src"), str):
            src = rest.pop("src")
            if data.get("src") is None:
                data["src"] = src
        if isinstance(rest.get("imageStyle"), str):
            image_style = rest.pop("imageStyle")
            if data.get("image_style") is None and data.get("imageStyle") is None:
                data["image_style"] = image_style
        data["style"] = rest
        return data

    @model_serializer(mode="wrap")
    def _fold_style_fields(self, handler) -> Dict[str, Any]:
        data = handler(self)
        style = dict(data.get("style") or {})
        src = data.pop("src", None)
        image_style = data.pop("imageStyle", None)
        image_style = data.pop("image_style", image_style)
        if src is not None:
            style["src"] = src
        if image_style is not None:
            style["imageStyle"] = image_style
        data["style"] = style
        return data


Element = Annotated[
    Union[TextElement, ImageElement, ShapeElement, VideoElement, Object3DElement],
    Field(discriminator="type"),
]


class Transition(PlanModel):
    type: Literal["cut", "fade", "wipe", "zoom"] = "cut"
    duration: float = Field(0.0, ge=0)


class Scene(PlanModel):
    """Una escena del plan: intervalo de tiempo con sus elementos visuales."""
    id: str
    start_time: float = Field(0.0, ge=0)
    duration: float = Field(..., gt=0)
    description: str = ""
    elements: List[Element] = Field(default_factory=list)
    # Las animaciones son opacas para el pipeline
    animations: List[Dict[str, Any]] = Field(default_factory=list)
    transition: Optional[Transition] = None
    voiceover: Optional[str] = None

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def image_elements(self) -> List[ImageElement]:
        return [e for e in self.elements if isinstance(e, ImageElement)]


class Resolution(PlanModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class Typography(PlanModel):
    primary: str = "Inter"
    secondary: str = "Inter"
    sizes: Dict[str, float] = Field(default_factory=dict)


class GlobalStyle(PlanModel):
    color_palette: List[str] = Field(default_factory=list)
    typography: Typography = Field(default_factory=Typography)
    spacing: float = 0.0
    border_radius: float = 0.0


class AssetSpecification(PlanModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    style: str = "photorealistic"


class AssetRequirement(PlanModel):
    """Asset que falta generar para un elemento del plan (vinculado por `id`)."""
    id: str
    type: AssetKind = "image"
    description: str
    specifications: AssetSpecification
    provided_by_user: bool = False
    user_asset_url: Optional[str] = None


class CaptionData(PlanModel):
    """
    Un subtítulo temporizado (segundos).

    No se fuerza start_time < end_time aquí: los tracks se leen de fuentes
    externas y la consistencia la reporta el validador de subtítulos.
    """
    start_time: float
    end_time: float
    text: str
    style: Optional[CaptionStyleName] = None


class GeneratedAsset(PlanModel):
    """Respuesta del servicio de generación de assets."""
    asset_id: Optional[str] = None
    url: Optional[str] = None
    message: Optional[str] = None


class VideoPlan(PlanModel):
    """El plan completo de video, tal como lo produce la IA."""
    id: str
    duration: float = Field(..., gt=0)
    fps: int = Field(30, gt=0)
    resolution: Resolution
    aspect_ratio: Optional[AspectRatio] = None
    scenes: List[Scene] = Field(default_factory=list)
    required_assets: List[AssetRequirement] = Field(default_factory=list)
    style: GlobalStyle = Field(default_factory=GlobalStyle)
    captions: Optional[List[CaptionData]] = None

    @model_validator(mode="after")
    def _check_scene_timeline(self) -> "VideoPlan":
        previous_start = 0.0
        for index, scene in enumerate(self.scenes):
            if scene.start_time + TIME_EPSILON < previous_start:
                raise ValueError(
                    f"Escena {index + 1} ({scene.id}): start_time {scene.start_time} "
                    f"es menor que el de la escena anterior ({previous_start})"
                )
            if scene.end_time > self.duration + TIME_EPSILON:
                raise ValueError(
                    f"Escena {index + 1} ({scene.id}): termina en {scene.end_time:.3f}s, "
                    f"después de la duración del plan ({self.duration}s)"
                )
            previous_start = scene.start_time
        return self

    @property
    def frame_count(self) -> int:
        return round(self.duration * self.fps)

    def to_render_payload(self) -> Dict[str, Any]:
        """Dict camelCase listo para el renderizador (imágenes con `style.src`)."""
        return self.model_dump(mode="json", by_alias=True)
