"""
Cache en disco para imágenes ya resueltas.
Evita volver a descargar URLs durante el precargado previo al render.
"""

import hashlib
from datetime import timedelta
from pathlib import Path
from typing import Optional

from diskcache import Cache


class AssetCache:
    """Cache persistente en disco de bytes de imágenes, indexado por URL."""

    def __init__(self, cache_dir: str = "./cache/assets", default_ttl_hours: int = 24):
        """
        Inicializa el cache.

        Args:
            cache_dir: Directorio para almacenar el cache
            default_ttl_hours: Tiempo de vida por defecto en horas
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.cache = Cache(str(self.cache_dir))
        self.default_ttl = timedelta(hours=default_ttl_hours)

    def _key(self, url: str) -> str:
        """Clave estable basada en la URL."""
        return "asset:" + hashlib.sha256(url.encode()).hexdigest()[:32]

    def get(self, url: str) -> Optional[bytes]:
        """Bytes almacenados para la URL, o None si no existe/expiró."""
        return self.cache.get(self._key(url))

    def set(self, url: str, content: bytes, ttl_hours: Optional[int] = None) -> None:
        """
        Almacena el contenido descargado de una URL.

        Args:
            url: URL de origen
            content: Bytes de la imagen
            ttl_hours: Tiempo de vida en horas (usa default si no se especifica)
        """
        ttl = timedelta(hours=ttl_hours) if ttl_hours else self.default_ttl
        self.cache.set(self._key(url), content, expire=ttl.total_seconds())

    def exists(self, url: str) -> bool:
        return self._key(url) in self.cache

    def clear_all(self) -> None:
        self.cache.clear()

    def get_stats(self) -> dict:
        """Obtiene estadísticas del cache."""
        return {
            "size_bytes": self.cache.volume(),
            "items_count": len(self.cache),
            "directory": str(self.cache_dir),
        }

    def close(self) -> None:
        """Cierra la conexión al cache."""
        self.cache.close()

    def __enter__(self) -> "AssetCache":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
