"""
Configuración del pipeline de resolución de planes.
Lee variables de entorno (.env) y, si existe, config/config.yaml para valores por defecto.
Las variables de entorno tienen prioridad sobre el YAML.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import yaml
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"


def _load_yaml(path: Union[str, Path]) -> dict:
    """Carga la sección `videoplan` del YAML de configuración."""
    config_path = Path(path)
    if not config_path.exists():
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        logger.warning(f"Configuración ignorada, no es un mapa: {config_path}")
        return {}
    section = data.get("videoplan", {})
    return section if isinstance(section, dict) else {}


def _setting(
    env_name: str,
    yaml_values: dict,
    default: Any,
    cast: Callable[[Any], Any] = str,
) -> Any:
    raw = os.getenv(env_name)
    if raw is None or raw.strip() == "":
        raw = yaml_values.get(env_name.lower())
    if raw is None:
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError):
        logger.warning(f"Valor inválido para {env_name}: {raw!r}, usando {default!r}")
        return default


@dataclass(frozen=True)
class Settings:
    """Parámetros de ejecución del pipeline."""

    asset_service_url: str = ""
    asset_service_key: str = ""
    request_timeout: float = 60.0
    max_retries: int = 3
    retry_backoff: float = 1.0
    rate_limit_requests: int = 20
    rate_limit_period: float = 60.0
    cache_dir: str = "./cache/assets"
    cache_ttl_hours: int = 24
    preload_concurrency: int = 8

    @classmethod
    def from_env(cls, config_path: Optional[Union[str, Path]] = DEFAULT_CONFIG_PATH) -> "Settings":
        """
        Construye la configuración desde el entorno.

        Args:
            config_path: YAML opcional con valores por defecto (None para omitirlo)
        """
        values = _load_yaml(config_path) if config_path else {}
        return cls(
            asset_service_url=_setting("ASSET_SERVICE_URL", values, "").strip(),
            asset_service_key=_setting("ASSET_SERVICE_KEY", values, "").strip(),
            request_timeout=_setting("ASSET_REQUEST_TIMEOUT", values, 60.0, float),
            max_retries=max(1, _setting("ASSET_MAX_RETRIES", values, 3, int)),
            retry_backoff=max(0.0, _setting("ASSET_RETRY_BACKOFF", values, 1.0, float)),
            rate_limit_requests=max(1, _setting("ASSET_RATE_LIMIT_REQUESTS", values, 20, int)),
            rate_limit_period=_setting("ASSET_RATE_LIMIT_PERIOD", values, 60.0, float),
            cache_dir=_setting("ASSET_CACHE_DIR", values, "./cache/assets").strip(),
            cache_ttl_hours=max(1, _setting("ASSET_CACHE_TTL_HOURS", values, 24, int)),
            preload_concurrency=max(1, _setting("PRELOAD_CONCURRENCY", values, 8, int)),
        )

    def missing_fields(self) -> List[str]:
        """Variables requeridas para llamar al servicio de generación."""
        missing = []
        if not self.asset_service_url:
            missing.append("ASSET_SERVICE_URL")
        return missing
