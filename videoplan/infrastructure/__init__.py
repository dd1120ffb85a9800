"""Clientes de servicios externos (generación y precarga de imágenes)."""

from .asset_service import AssetServiceClient
from .preloader import ImagePreloader, PreloadSummary, collect_image_urls, preload_images

__all__ = [
    "AssetServiceClient",
    "ImagePreloader",
    "PreloadSummary",
    "collect_image_urls",
    "preload_images",
]
