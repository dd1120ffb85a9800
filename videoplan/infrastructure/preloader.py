"""
Precargador de imágenes - Infraestructura
Descarga en paralelo las imágenes ya resueltas y las guarda en el cache local
antes del render. Un fallo de precarga se registra y se ignora.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import httpx

from ..domain.models import Element, ImageElement, VideoPlan
from ..utils.cache import AssetCache
from ..assets.urls import HTTP_PREFIXES

logger = logging.getLogger(__name__)


@dataclass
class PreloadSummary:
    loaded: List[str] = field(default_factory=list)
    cached: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def collect_image_urls(elements: Sequence[Element]) -> List[str]:
    """URLs http(s) de las imágenes, sin duplicados y en orden."""
    urls = []
    for element in elements:
        if not isinstance(element, ImageElement):
            continue
        if element.content.lower().startswith(HTTP_PREFIXES):
            url = element.content
        elif element.src and element.src.lower().startswith(HTTP_PREFIXES):
            url = element.src
        else:
            continue
        if url not in urls:
            urls.append(url)
    return urls


class ImagePreloader:
    """Precarga imágenes en paralelo con tolerancia a fallos por imagen."""

    def __init__(
        self,
        cache: AssetCache,
        concurrency: int = 8,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache
        self.concurrency = max(1, concurrency)
        self.timeout = timeout
        self.transport = transport

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        url: str,
        summary: PreloadSummary,
    ) -> None:
        async with semaphore:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning(f"No se pudo precargar la imagen {url}: {e}")
                summary.failed.append(url)
                return
        self.cache.set(url, response.content)
        summary.loaded.append(url)

    async def _preload_all(self, urls: List[str], summary: PreloadSummary) -> None:
        semaphore = asyncio.Semaphore(self.concurrency)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            await asyncio.gather(*(self._fetch(client, semaphore, url, summary) for url in urls))

    def preload(self, elements: Sequence[Element]) -> PreloadSummary:
        """
        Precarga las imágenes de los elementos.

        Args:
            elements: Elementos ya resueltos

        Returns:
            PreloadSummary con URLs descargadas, ya cacheadas y fallidas
        """
        summary = PreloadSummary()
        pending = []
        for url in collect_image_urls(elements):
            if self.cache.exists(url):
                summary.cached.append(url)
            else:
                pending.append(url)

        if pending:
            asyncio.run(self._preload_all(pending, summary))

        logger.info(
            f"Precarga: {len(summary.loaded)} descargadas, {len(summary.cached)} en cache, "
            f"{len(summary.failed)} fallidas"
        )
        return summary

    def preload_plan(self, plan: VideoPlan) -> PreloadSummary:
        """Precarga las imágenes de todas las escenas del plan."""
        elements = [element for scene in plan.scenes for element in scene.elements]
        return self.preload(elements)


def preload_images(
    elements: Sequence[Element],
    cache: AssetCache,
    concurrency: int = 8,
) -> PreloadSummary:
    """Atajo: precarga las imágenes de `elements` en `cache`."""
    return ImagePreloader(cache, concurrency=concurrency).preload(elements)
