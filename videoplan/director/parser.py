"""
Parser de planes de video
Valida y convierte la salida del LLM (JSON) en un VideoPlan de dominio.
"""
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

from ..domain.models import ImageElement, VideoPlan
from ..presets import ASPECT_RATIOS, resolution_for_aspect_ratio

logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


class PlanParser:
    """Validador y parseador de planes estructurados."""

    def _decode(self, raw_input: str) -> Dict[str, Any]:
        # Limpiar bloques de código markdown si existen
        fenced = CODE_FENCE.search(raw_input)
        clean_input = fenced.group(1) if fenced else raw_input.strip()
        try:
            data = json.loads(clean_input)
        except json.JSONDecodeError as e:
            logger.error(f"Error decodificando JSON del plan: {e}")
            raise ValueError("El LLM no devolvió un JSON válido") from e
        if not isinstance(data, dict):
            raise ValueError("El plan debe ser un objeto JSON")
        return data

    def parse(self, raw_input: Union[str, Dict[str, Any]]) -> VideoPlan:
        """
        Convierte un JSON (string o dict) en un VideoPlan validado.

        Raises:
            ValueError: Si el JSON no es válido
            pydantic.ValidationError: Si el plan no respeta el esquema o la línea de tiempo
        """
        data = self._decode(raw_input) if isinstance(raw_input, str) else dict(raw_input)

        # Completar la resolución a partir de la relación de aspecto
        aspect_ratio = data.get("aspectRatio") or data.get("aspect_ratio")
        if "resolution" not in data and aspect_ratio in ASPECT_RATIOS:
            data["resolution"] = resolution_for_aspect_ratio(aspect_ratio).model_dump()

        plan = VideoPlan.model_validate(data)
        self._validate_logic(plan)
        return plan

    def parse_file(self, path: Union[str, Path]) -> VideoPlan:
        with open(path, "r", encoding="utf-8") as f:
            return self.parse(f.read())

    def _validate_logic(self, plan: VideoPlan):
        """Reglas de negocio extra (solo advertencias)."""
        if not plan.scenes:
            logger.warning(f"El plan {plan.id} no tiene escenas.")

        previous_end = 0.0
        for index, scene in enumerate(plan.scenes):
            if scene.start_time > previous_end + 1e-6:
                logger.warning(
                    f"Hueco de {scene.start_time - previous_end:.2f}s antes de la escena {index + 1}"
                )
            previous_end = max(previous_end, scene.end_time)

            if not scene.elements:
                logger.warning(f"La escena {index + 1} ({scene.id}) no tiene elementos.")
            for element in scene.elements:
                if isinstance(element, ImageElement) and not element.content and not element.src:
                    logger.warning(f"Imagen {element.id} sin descripción ni fuente")

        if plan.aspect_ratio:
            preset = ASPECT_RATIOS[plan.aspect_ratio]
            if (plan.resolution.width, plan.resolution.height) != (preset.width, preset.height):
                logger.warning(
                    f"Resolución {plan.resolution.width}x{plan.resolution.height} no coincide "
                    f"con {preset.label}"
                )
