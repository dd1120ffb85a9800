from conftest import image, make_plan, text
from videoplan.assets import validate_images_for_rendering, validate_plan_for_rendering
from videoplan.domain.models import Scene


def elements(*items):
    return Scene.model_validate({"id": "s", "duration": 1, "elements": list(items)}).elements


def test_image_without_source_is_missing():
    result = validate_images_for_rendering(elements(image("i1", "")))
    assert not result.valid
    assert result.missing_images == ["i1"]
    assert result.issues == ['El elemento de imagen "i1" no tiene URL ni fuente']


def test_images_with_sources_are_ready():
    result = validate_images_for_rendering(elements(
        text("t1"),
        image("i1", "https://cdn.test/i1.png"),
        image("i2", "", style={"src": "data:image/png;base64,AAAA"}),
    ))
    assert result
    assert result.missing_images == []
    assert result.issues == []


def test_malformed_source_is_an_issue_not_missing():
    result = validate_images_for_rendering(elements(image("i1", "a dog", style={"src": "not a url"})))
    assert not result.valid
    assert result.missing_images == []
    assert result.issues == ['El elemento de imagen "i1" tiene un formato de URL inválido']


def test_plan_issues_are_prefixed_with_scene_number():
    plan = make_plan([
        {"id": "s1", "startTime": 0, "duration": 2, "elements": [image("ok", "https://x/y.png")]},
        {"id": "s2", "startTime": 2, "duration": 2, "elements": [image("bad", "")]},
    ])
    result = validate_plan_for_rendering(plan)
    assert result.missing_images == ["bad"]
    assert result.issues == ['Escena 2: El elemento de imagen "bad" no tiene URL ni fuente']


def test_empty_src_is_reported_as_missing():
    result = validate_images_for_rendering(elements(image("i1", "", style={"src": ""})))
    assert result.missing_images == ["i1"]
    assert result.issues == ['El elemento de imagen "i1" no tiene URL ni fuente']
