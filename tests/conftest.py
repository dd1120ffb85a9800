from typing import Dict, List, Optional

import pytest

from videoplan.domain.models import GeneratedAsset, VideoPlan


def image(element_id: str, content: str = "", **extra) -> dict:
    data = {"id": element_id, "type": "image", "content": content}
    data.update(extra)
    return data


def text(element_id: str, content: str = "Hola") -> dict:
    return {"id": element_id, "type": "text", "content": content}


def make_plan(scenes: List[dict], duration: Optional[float] = None, **extra) -> VideoPlan:
    if duration is None:
        duration = max((s.get("startTime", 0) + s["duration"] for s in scenes), default=10)
    data = {
        "id": "plan-1",
        "duration": duration,
        "fps": 30,
        "resolution": {"width": 1080, "height": 1920},
        "scenes": scenes,
    }
    data.update(extra)
    return VideoPlan.model_validate(data)


class FakeGenerator:
    """Generador en memoria: URL determinística, o excepción para los ids indicados."""

    def __init__(self, failing=(), empty=()):
        self.failing = set(failing)
        self.empty = set(empty)
        self.calls: List[Dict] = []

    def generate(self, asset_id, description, width, height, style):
        self.calls.append({
            "asset_id": asset_id,
            "description": description,
            "width": width,
            "height": height,
            "style": style,
        })
        if asset_id in self.failing:
            raise RuntimeError(f"boom {asset_id}")
        if asset_id in self.empty:
            return GeneratedAsset(asset_id=asset_id, url=None)
        return GeneratedAsset(asset_id=asset_id, url=f"https://cdn.test/{asset_id}.png")


@pytest.fixture
def generator():
    return FakeGenerator()
