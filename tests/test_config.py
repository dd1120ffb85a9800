from videoplan.config import Settings

ENV_VARS = (
    "ASSET_SERVICE_URL",
    "ASSET_SERVICE_KEY",
    "ASSET_REQUEST_TIMEOUT",
    "ASSET_MAX_RETRIES",
    "ASSET_RETRY_BACKOFF",
    "ASSET_RATE_LIMIT_REQUESTS",
    "ASSET_RATE_LIMIT_PERIOD",
    "ASSET_CACHE_DIR",
    "ASSET_CACHE_TTL_HOURS",
    "PRELOAD_CONCURRENCY",
)


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_yaml(monkeypatch):
    clear_env(monkeypatch)
    settings = Settings.from_env(config_path=None)
    assert settings == Settings()
    assert settings.missing_fields() == ["ASSET_SERVICE_URL"]


def test_environment_overrides_yaml(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text(
        "videoplan:\n"
        "  asset_service_url: https://yaml.test/generate\n"
        "  asset_max_retries: 5\n"
        "  preload_concurrency: 4\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ASSET_SERVICE_URL", "https://env.test/generate")

    settings = Settings.from_env(config_path=path)
    assert settings.asset_service_url == "https://env.test/generate"
    assert settings.max_retries == 5
    assert settings.preload_concurrency == 4
    assert settings.missing_fields() == []


def test_invalid_values_fall_back_to_defaults(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("ASSET_MAX_RETRIES", "many")
    monkeypatch.setenv("PRELOAD_CONCURRENCY", "0")
    settings = Settings.from_env(config_path=None)
    assert settings.max_retries == 3
    assert settings.preload_concurrency == 1


def test_missing_yaml_file_is_ignored(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    assert Settings.from_env(config_path=tmp_path / "nope.yaml") == Settings()
