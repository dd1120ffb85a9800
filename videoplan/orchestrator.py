"""
Orquestador de resolución de planes
Recorre las escenas de un plan, genera las imágenes faltantes y devuelve un plan
listo para el render junto con el historial de progreso.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .assets.generation import (
    AssetGenerationCoordinator,
    AssetGenerator,
    AssetStatus,
    CancellationToken,
    GenerationReport,
)
from .assets.injector import inject_image_urls
from .assets.readiness import RenderReadiness, validate_plan_for_rendering
from .assets.requirements import extract_image_requirements
from .domain.models import Scene, VideoPlan

logger = logging.getLogger(__name__)

SceneProgressCallback = Callable[[int, str, AssetStatus], None]


@dataclass(frozen=True)
class ProgressEvent:
    scene_index: int
    asset_id: str
    status: AssetStatus


@dataclass
class PlanResolution:
    """Resultado de una corrida: plan resuelto, progreso y reportes."""
    plan: VideoPlan
    events: List[ProgressEvent] = field(default_factory=list)
    reports: Dict[int, GenerationReport] = field(default_factory=dict)
    readiness: Optional[RenderReadiness] = None
    cancelled: bool = False

    @property
    def failed_assets(self) -> List[str]:
        return [asset_id for report in self.reports.values() for asset_id in report.failed_ids]


class PlanResolver:
    """
    El 'Director de Orquesta' del plan.
    Extrae requerimientos, genera, inyecta y valida, escena por escena.
    """

    def __init__(self, generator: AssetGenerator):
        self.coordinator = AssetGenerationCoordinator(generator)

    def _user_provided_urls(self, plan: VideoPlan) -> Dict[str, str]:
        return {
            asset.id: asset.user_asset_url
            for asset in plan.required_assets
            if asset.provided_by_user and asset.user_asset_url
        }

    def resolve(
        self,
        plan: VideoPlan,
        on_progress: Optional[SceneProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PlanResolution:
        """
        Resuelve todas las escenas del plan, en orden.

        Nunca falla por un asset individual: el plan devuelto puede tener
        imágenes sin fuente, que `readiness` deja a la vista del llamador.

        Args:
            plan: Plan original (no se modifica)
            on_progress: Callback (scene_index, asset_id, status)
            cancel_token: Token para abandonar la corrida entre generaciones

        Returns:
            PlanResolution con el plan nuevo
        """
        resolution = PlanResolution(plan=plan)
        user_urls = self._user_provided_urls(plan)
        scenes: List[Scene] = []

        logger.info(f"🚀 Resolviendo plan {plan.id} ({len(plan.scenes)} escenas)")

        for scene_index, scene in enumerate(plan.scenes):
            requirements = extract_image_requirements(scene.elements, plan.required_assets)
            scene_user_urls = {
                element.id: user_urls[element.id]
                for element in scene.image_elements()
                if element.id in user_urls
            }

            if not requirements and not scene_user_urls:
                scenes.append(scene.model_copy(deep=True))
                continue

            def report_progress(asset_id: str, status: AssetStatus, index: int = scene_index) -> None:
                resolution.events.append(ProgressEvent(index, asset_id, status))
                if on_progress:
                    on_progress(index, asset_id, status)

            url_map = dict(scene_user_urls)
            if requirements:
                logger.info(f"Escena {scene_index + 1}: {len(requirements)} imágenes por generar")
                report = self.coordinator.generate(
                    requirements,
                    on_progress=report_progress,
                    cancel_token=cancel_token,
                )
                resolution.reports[scene_index] = report
                url_map.update(report.url_map)
                if report.cancelled:
                    resolution.cancelled = True

            elements = inject_image_urls(scene.elements, url_map)
            scenes.append(scene.model_copy(update={"elements": elements}))

        resolution.plan = plan.model_copy(update={"scenes": scenes})
        resolution.readiness = validate_plan_for_rendering(resolution.plan)

        if resolution.failed_assets:
            logger.warning(
                f"Plan {plan.id}: {len(resolution.failed_assets)} assets requieren atención manual"
            )
        logger.info(f"✅ Plan {plan.id} resuelto (listo para render: {resolution.readiness.valid})")
        return resolution
