from conftest import image, text
from videoplan.assets import inject_image_urls
from videoplan.domain.models import Scene


def scene_elements():
    return Scene.model_validate({
        "id": "s",
        "duration": 1,
        "elements": [text("t1"), image("i1", "a sunset", style={"opacity": 1}), image("i2", "a dog")],
    }).elements


def test_urls_are_written_to_content_and_src():
    updated = inject_image_urls(scene_elements(), {"i1": "https://cdn.test/i1.png"})
    assert updated[1].content == "https://cdn.test/i1.png"
    assert updated[1].src == "https://cdn.test/i1.png"
    assert updated[1].style == {"opacity": 1}
    assert updated[2].content == "a dog"
    assert updated[0] == scene_elements()[0]


def test_input_is_not_modified():
    original = scene_elements()
    snapshot = [e.model_copy(deep=True) for e in original]
    updated = inject_image_urls(original, {"i1": "https://cdn.test/i1.png"})
    assert original == snapshot
    assert updated[1] is not original[1]


def test_injection_is_idempotent():
    url_map = {"i1": "https://cdn.test/i1.png", "i2": "https://cdn.test/i2.png"}
    once = inject_image_urls(scene_elements(), url_map)
    assert inject_image_urls(once, url_map) == once


def test_ids_without_url_are_left_alone():
    assert inject_image_urls(scene_elements(), {}) == scene_elements()
