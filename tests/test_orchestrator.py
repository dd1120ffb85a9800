from conftest import FakeGenerator, image, make_plan, text
from videoplan.assets import AssetStatus, CancellationToken
from videoplan.orchestrator import PlanResolver


def sample_plan(**extra):
    return make_plan([
        {"id": "s1", "startTime": 0, "duration": 3, "elements": [text("t1"), image("i1", "a sunset")]},
        {"id": "s2", "startTime": 3, "duration": 3, "elements": [text("t2")]},
        {"id": "s3", "startTime": 6, "duration": 3,
         "elements": [image("i2", "a dog"), image("i3", "https://cdn.test/ready.png")]},
    ], **extra)


def test_resolves_every_scene_and_keeps_original():
    plan = sample_plan()
    events = []
    resolution = PlanResolver(FakeGenerator()).resolve(
        plan, on_progress=lambda scene, asset_id, status: events.append((scene, asset_id, status))
    )

    resolved = resolution.plan
    assert resolved.scenes[0].elements[1].content == "https://cdn.test/i1.png"
    assert resolved.scenes[2].elements[0].src == "https://cdn.test/i2.png"
    assert resolved.scenes[2].elements[1].content == "https://cdn.test/ready.png"
    assert resolved.scenes[1] == plan.scenes[1]
    assert resolved.id == plan.id and resolved.duration == plan.duration

    assert plan.scenes[0].elements[1].content == "a sunset"
    assert events == [
        (0, "i1", AssetStatus.GENERATING),
        (0, "i1", AssetStatus.READY),
        (2, "i2", AssetStatus.GENERATING),
        (2, "i2", AssetStatus.READY),
    ]
    assert [(e.scene_index, e.asset_id) for e in resolution.events][::2] == [(0, "i1"), (2, "i2")]
    assert resolution.readiness.valid
    assert resolution.failed_assets == []


def test_failed_asset_is_left_for_the_caller():
    resolution = PlanResolver(FakeGenerator(failing={"i1"})).resolve(sample_plan())
    assert resolution.failed_assets == ["i1"]
    assert resolution.plan.scenes[0].elements[1].content == "a sunset"
    assert resolution.plan.scenes[2].elements[0].content == "https://cdn.test/i2.png"
    assert not resolution.readiness.valid
    assert resolution.readiness.missing_images == ["i1"]


def test_user_provided_assets_are_injected_without_generation():
    generator = FakeGenerator()
    plan = sample_plan(requiredAssets=[{
        "id": "i1",
        "description": "logo",
        "specifications": {"width": 512, "height": 512},
        "providedByUser": True,
        "userAssetUrl": "https://uploads.test/logo.png",
    }])
    resolution = PlanResolver(generator).resolve(plan)
    assert [call["asset_id"] for call in generator.calls] == ["i2"]
    assert resolution.plan.scenes[0].elements[1].content == "https://uploads.test/logo.png"


def test_cancellation_marks_resolution():
    token = CancellationToken()
    token.cancel()
    generator = FakeGenerator()
    resolution = PlanResolver(generator).resolve(sample_plan(), cancel_token=token)
    assert resolution.cancelled
    assert generator.calls == []
    assert resolution.reports[0].pending == ["i1"]
    assert resolution.readiness.valid is False


def test_odd_element_does_not_abort_other_scenes():
    plan = make_plan([
        {"id": "s1", "startTime": 0, "duration": 2, "elements": [
            image("tiny", "a speck", size={"width": 0.5, "height": -1}),
            image("blank", "a cloud", style={"src": ""}),
        ]},
        {"id": "s2", "startTime": 2, "duration": 2, "elements": [image("ok", "a dog")]},
    ])
    generator = FakeGenerator()
    resolution = PlanResolver(generator).resolve(plan)

    assert [call["asset_id"] for call in generator.calls] == ["tiny", "blank", "ok"]
    assert (generator.calls[0]["width"], generator.calls[0]["height"]) == (1024, 1024)
    assert resolution.plan.scenes[1].elements[0].content == "https://cdn.test/ok.png"
    assert resolution.readiness.valid
