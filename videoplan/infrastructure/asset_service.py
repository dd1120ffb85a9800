"""
Cliente del servicio de generación de assets - Infraestructura
Envía (assetId, descripción, tamaño, estilo) al endpoint y devuelve la URL generada.
"""
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..domain.models import GeneratedAsset
from ..utils.backoff import (
    APIError,
    AssetGenerationError,
    AuthenticationError,
    RateLimiter,
    RateLimitError,
    with_retry,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_ENDPOINT = "asset_service"


class AssetServiceClient:
    """
    Cliente HTTP del servicio de generación de imágenes.
    Implementa el protocolo AssetGenerator que usa el coordinador.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            settings: Configuración (por defecto se lee del entorno)
            rate_limiter: Limitador compartido entre clientes
            transport: Transporte httpx alternativo (tests)
        """
        self.settings = settings or Settings.from_env()
        if not self.settings.asset_service_url:
            logger.warning("🚫 ASSET_SERVICE_URL no configurada. Las generaciones fallarán.")

        self.rate_limiter = rate_limiter or RateLimiter()
        self.rate_limiter.set_limit(
            RATE_LIMIT_ENDPOINT,
            self.settings.rate_limit_requests,
            self.settings.rate_limit_period,
        )

        headers = {"Content-Type": "application/json"}
        if self.settings.asset_service_key:
            headers["Authorization"] = f"Bearer {self.settings.asset_service_key}"
        self.client = httpx.Client(
            headers=headers,
            timeout=self.settings.request_timeout,
            transport=transport,
        )

        # Solo se reintentan errores transitorios; un 4xx/5xx definitivo falla de inmediato
        self._post_with_retry = with_retry(
            max_attempts=self.settings.max_retries,
            min_wait=0.0,
            multiplier=self.settings.retry_backoff,
            exceptions=(httpx.TransportError, RateLimitError),
        )(self._post)

    def _post(self, payload: dict) -> httpx.Response:
        self.rate_limiter.wait_if_needed(RATE_LIMIT_ENDPOINT)
        response = self.client.post(self.settings.asset_service_url, json=payload)
        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded")
        return response

    def generate(
        self,
        asset_id: str,
        description: str,
        width: int,
        height: int,
        style: str,
    ) -> GeneratedAsset:
        """
        Solicita la generación de una imagen.

        Returns:
            GeneratedAsset con la URL pública

        Raises:
            AssetGenerationError: Si el servicio falla o no devuelve URL
            AuthenticationError: Si la API key es rechazada
            RateLimitError: Si el rate limit persiste tras los reintentos
        """
        if not self.settings.asset_service_url:
            raise AssetGenerationError("ASSET_SERVICE_URL no configurada")

        payload = {
            "assetId": asset_id,
            "description": description,
            "width": width,
            "height": height,
            "style": style,
        }
        logger.info(f"🎨 Generando asset {asset_id}: '{description[:60]}'")

        try:
            response = self._post_with_retry(payload)
        except httpx.HTTPError as e:
            raise AssetGenerationError(f"Servicio de assets inalcanzable: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"API key rechazada ({response.status_code})")
        if response.status_code == 402:
            raise APIError("Payment required")

        try:
            data = response.json()
        except ValueError as e:
            raise AssetGenerationError(
                f"Respuesta no JSON del servicio ({response.status_code})"
            ) from e

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise AssetGenerationError(
                f"Error del servicio ({response.status_code}): {message or 'desconocido'}"
            )
        if not isinstance(data, dict):
            raise AssetGenerationError("Respuesta inesperada del servicio de assets")

        asset = GeneratedAsset.model_validate(data)
        if not asset.url:
            raise AssetGenerationError("No URL returned from asset generation")
        return asset

    def close(self):
        self.client.close()

    def __enter__(self) -> "AssetServiceClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
