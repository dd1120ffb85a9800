"""
Coordinador de generación de assets.

Llama al servicio de generación una vez por requerimiento, en orden estricto
(secuencial, para respetar los rate limits del servicio). Un fallo en un asset
nunca aborta el lote: se registra y se continúa con el siguiente.
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..domain.models import AssetRequirement, GeneratedAsset
from ..utils.backoff import AssetGenerationError

logger = logging.getLogger(__name__)


class AssetStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


ProgressCallback = Callable[[str, AssetStatus], None]


class AssetGenerator(Protocol):
    """Servicio externo de generación de assets."""

    def generate(
        self,
        asset_id: str,
        description: str,
        width: int,
        height: int,
        style: str,
    ) -> GeneratedAsset:
        """Genera el asset. Lanza una excepción si falla."""


class CancellationToken:
    """Permite abandonar un lote largo entre una generación y la siguiente."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class AssetMetadata:
    """Estado transitorio de un asset durante una corrida del coordinador."""
    asset_id: str
    status: AssetStatus = AssetStatus.PENDING
    url: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class AssetResult:
    """Resultado por asset: URL si se generó, motivo si falló."""
    asset_id: str
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.url is not None


@dataclass
class GenerationReport:
    """Resultados ordenados de un lote de generación."""
    results: List[AssetResult] = field(default_factory=list)
    pending: List[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def url_map(self) -> Dict[str, str]:
        """Solo los assets generados con éxito. Un id ausente requiere atención manual."""
        return {r.asset_id: r.url for r in self.results if r.ok}

    @property
    def failed_ids(self) -> List[str]:
        return [r.asset_id for r in self.results if not r.ok]


class AssetGenerationCoordinator:
    """Ejecuta un lote de requerimientos contra el servicio de generación."""

    def __init__(self, generator: AssetGenerator):
        """
        Args:
            generator: Servicio de generación (ver AssetGenerator)
        """
        self.generator = generator

    def _report(
        self,
        asset: AssetMetadata,
        status: AssetStatus,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        asset.status = status
        if on_progress:
            on_progress(asset.asset_id, status)

    def _generate_one(self, requirement: AssetRequirement) -> str:
        spec = requirement.specifications
        response = self.generator.generate(
            requirement.id,
            requirement.description,
            spec.width,
            spec.height,
            spec.style,
        )
        url = response.url if response is not None else None
        if not url:
            raise AssetGenerationError("No URL returned from asset generation")
        return url

    def generate(
        self,
        requirements: Sequence[AssetRequirement],
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> GenerationReport:
        """
        Genera los assets de un lote, uno por uno.

        Args:
            requirements: Requerimientos en orden
            on_progress: Callback (asset_id, status)
            cancel_token: Token consultado antes de cada generación

        Returns:
            GenerationReport con un resultado por asset intentado
        """
        assets = [AssetMetadata(asset_id=req.id) for req in requirements]
        report = GenerationReport()

        for index, (requirement, asset) in enumerate(zip(requirements, assets)):
            if cancel_token is not None and cancel_token.cancelled:
                report.cancelled = True
                report.pending = [a.asset_id for a in assets[index:]]
                logger.warning(
                    f"Generación cancelada: {len(report.pending)} assets quedan pendientes"
                )
                break

            self._report(asset, AssetStatus.GENERATING, on_progress)
            try:
                asset.url = self._generate_one(requirement)
            except Exception as e:
                asset.error = str(e) or e.__class__.__name__
                self._report(asset, AssetStatus.ERROR, on_progress)
                logger.error(f"Error generando imagen para {requirement.id}: {asset.error}")
                report.results.append(AssetResult(asset_id=asset.asset_id, error=asset.error))
                continue

            self._report(asset, AssetStatus.READY, on_progress)
            report.results.append(AssetResult(asset_id=asset.asset_id, url=asset.url))

        logger.info(
            f"Assets generados: {len(report.url_map)}/{len(requirements)}"
            + (f" ({len(report.failed_ids)} con error)" if report.failed_ids else "")
        )
        return report
