"""
Helpers de URLs de imágenes: detección de fuente, validación y optimización.
"""

from typing import Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..domain.models import ImageElement

HTTP_PREFIXES = ("http://", "https://")
DATA_PREFIX = "data:"

# Hosts de storage que aceptan parámetros de transformación de imagen
TRANSFORMING_HOSTS = ("supabase",)


def _has_url_scheme(value: str) -> bool:
    lowered = value[:8].lower()
    return lowered.startswith(HTTP_PREFIXES) or lowered.startswith(DATA_PREFIX)


def image_source(element: ImageElement) -> Optional[str]:
    """
    Devuelve la fuente de una imagen o None si todavía no tiene.

    Una imagen tiene fuente si su contenido es una URL http(s) o un data URI,
    o si trae un `src` de tipo string no vacío.
    """
    content = element.content or ""
    if _has_url_scheme(content):
        return content
    return element.src or None


def has_image_source(element: ImageElement) -> bool:
    return image_source(element) is not None


def is_well_formed_url(value: str) -> bool:
    """
    Verifica que una fuente sea una URL bien formada.

    http(s) necesita host; data: necesita el separador de payload.
    """
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False

    scheme = parts.scheme.lower()
    if not scheme:
        return False
    if scheme in ("http", "https"):
        try:
            # .port valida el puerto y lanza ValueError si no es numérico
            parts.port
        except ValueError:
            return False
        return bool(parts.hostname)
    if scheme == "data":
        return "," in parts.path
    return bool(parts.netloc or parts.path)


def optimize_image_url(
    url: str,
    target_width: Optional[int] = None,
    target_height: Optional[int] = None,
) -> str:
    """
    Agrega parámetros de transformación (tamaño, calidad, formato) cuando el
    host de storage los soporta. Si la URL no se puede interpretar se devuelve igual.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.hostname:
        return url
    if not any(host in parts.hostname for host in TRANSFORMING_HOSTS):
        return url

    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    if target_width:
        params["width"] = str(target_width)
    if target_height:
        params["height"] = str(target_height)
    params["quality"] = "90"
    params["format"] = "webp"
    return urlunsplit(parts._replace(query=urlencode(params)))


def recommended_image_size(video_width: int, video_height: int) -> Tuple[int, int]:
    """Tamaño recomendado de imagen para una resolución de video (1:1 con el video)."""
    return video_width, video_height
