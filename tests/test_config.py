"""Tests for the global configuration file and environment overrides."""

import pytest

from taskflow.global_config import (
    AIProvider,
    AppConfig,
    get_config_dir,
    get_global_config,
    save_global_config,
)


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    (tmp_path / "home").mkdir()
    monkeypatch.setenv("TASKFLOW_HOME", str(tmp_path / "home"))
    for name in ["TASKFLOW_DATA_DIR", "TASKFLOW_AI_PROVIDER", "OLLAMA_URL", "OPENAI_API_KEY"]:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "home"


def test_defaults(home):
    config = get_global_config()

    assert get_config_dir() == home
    assert config.data_dir == str(home / "data")
    assert config.ai.provider == AIProvider.LOCAL
    assert config.ai.local_model == "qwen2.5-coder:7b"
    assert config.recent_activity_limit == 10


def test_save_and_reload(home):
    config = AppConfig(data_dir="/srv/taskflow")
    config.ai.provider = AIProvider.OPENAI
    save_global_config(config)

    loaded = get_global_config()

    assert loaded.data_dir == "/srv/taskflow"
    assert loaded.ai.provider == AIProvider.OPENAI


def test_invalid_file_falls_back_to_defaults(home):
    (home / "config.json").write_text("{broken")
    assert get_global_config().ai.provider == AIProvider.LOCAL


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TASKFLOW_DATA_DIR", "/tmp/elsewhere")
    monkeypatch.setenv("TASKFLOW_AI_PROVIDER", "MOCK")
    monkeypatch.setenv("OLLAMA_URL", "http://gpu-box:11434")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    config = get_global_config()

    assert config.data_dir == "/tmp/elsewhere"
    assert config.ai.provider == AIProvider.MOCK
    assert config.ai.ollama_url == "http://gpu-box:11434"
    assert config.ai.openai_api_key == "sk-env"


def test_unknown_provider_is_ignored(monkeypatch):
    monkeypatch.setenv("TASKFLOW_AI_PROVIDER", "skynet")
    assert get_global_config().ai.provider == AIProvider.LOCAL
