import json

import pytest

from conftest import FakeGenerator
from videoplan.main import main

PLAN = {
    "id": "plan-cli",
    "duration": 4,
    "aspectRatio": "square",
    "scenes": [
        {"id": "s1", "startTime": 0, "duration": 4, "voiceover": "uno dos tres cuatro cinco", "elements": [
            {"id": "i1", "type": "image", "content": "a sunset"},
        ]},
    ],
}


@pytest.fixture
def plan_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("ASSET_SERVICE_URL", "ASSET_SERVICE_KEY"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(PLAN), encoding="utf-8")
    return path


class FakeClient(FakeGenerator):
    def __init__(self, settings=None):
        super().__init__()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None


def test_validate_reports_missing_images(plan_file):
    assert main(["validate", str(plan_file)]) == 3


def test_validate_unreadable_plan(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    assert main(["validate", str(path)]) == 1


def test_resolve_requires_service_url(plan_file):
    assert main(["resolve", str(plan_file)]) == 2


def test_resolve_writes_plan_and_captions(plan_file, tmp_path, monkeypatch):
    monkeypatch.setenv("ASSET_SERVICE_URL", "https://svc.test/generate")
    monkeypatch.setattr("videoplan.infrastructure.asset_service.AssetServiceClient", FakeClient)
    output = tmp_path / "resolved.json"
    srt = tmp_path / "captions.srt"

    assert main(["resolve", str(plan_file), "-o", str(output), "--captions", str(srt)]) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    element = payload["scenes"][0]["elements"][0]
    assert element["content"] == "https://cdn.test/i1.png"
    assert element["style"]["src"] == "https://cdn.test/i1.png"
    assert payload["resolution"] == {"width": 1080, "height": 1080}
    assert srt.read_text(encoding="utf-8").startswith("1\n00:00:00,000 --> ")


def test_captions_segment_and_check(tmp_path):
    srt = tmp_path / "out.srt"
    args = ["captions", "segment", "--text", "one two three four five six seven eight",
            "--duration", "4", "-o", str(srt)]
    assert main(args) == 0
    assert srt.read_text(encoding="utf-8") == (
        "1\n00:00:00,000 --> 00:00:02,000\none two three four\n\n"
        "2\n00:00:02,000 --> 00:00:04,000\nfive six seven eight\n"
    )
    assert main(["captions", "check", str(srt)]) == 0


def test_captions_check_flags_overlap(tmp_path):
    srt = tmp_path / "bad.srt"
    srt.write_text(
        "1\n00:00:00,000 --> 00:00:03,000\nA\n\n2\n00:00:02,000 --> 00:00:04,000\nB\n",
        encoding="utf-8",
    )
    assert main(["captions", "check", str(srt)]) == 3


def test_captions_segment_rejects_bad_duration():
    assert main(["captions", "segment", "--text", "hola", "--duration", "0"]) == 1
