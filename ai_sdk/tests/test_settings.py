import logging

import pydantic
import pytest

from ai_sdk.config.settings import Settings
from ai_sdk.domain.exceptions import HttpStatusError
from ai_sdk.domain.result import Result
from ai_sdk.infrastructure.logging import logger as logger_module
from ai_sdk.streaming.normalizer import normalize_chunk


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "CHUNK_TIMEOUT", "MAX_FUNCTION_ROUNDS", "LOG_LEVEL", "AI_SDK_CONFIG_FILE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_yaml_config_is_loaded(monkeypatch, clean_env):
    cfg = clean_env / "custom.yaml"
    cfg.write_text("openai_base_url: http://localhost:8080/v1\nchunk_timeout: 2.5\n", encoding="utf-8")
    monkeypatch.setenv("AI_SDK_CONFIG_FILE", str(cfg))

    s = Settings()
    assert s.openai_base_url == "http://localhost:8080/v1"
    assert s.chunk_timeout == 2.5
    assert s.max_function_rounds is None


def test_env_overrides_yaml(monkeypatch, clean_env):
    cfg = clean_env / "config.yaml"
    cfg.write_text("chunk_timeout: 2.5\n", encoding="utf-8")
    monkeypatch.setenv("CHUNK_TIMEOUT", "7")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    s = Settings()
    assert s.chunk_timeout == 7.0
    assert s.openai_api_key == "sk-from-env"


def test_blank_api_key_counts_as_missing(monkeypatch, clean_env):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    assert Settings().openai_api_key is None


def test_log_level_is_normalized(monkeypatch, clean_env):
    assert Settings().log_level == "INFO"
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_debug_events_reach_handlers_when_configured(monkeypatch, caplog):
    class SettingsStub:
        log_level = "DEBUG"
        log_dir = logger_module.settings.log_dir
        log_redact_content = False

    sdk_logger = logging.getLogger("ai_sdk")
    previous = sdk_logger.level
    monkeypatch.setattr(logger_module, "settings", SettingsStub())
    try:
        logger_module.setup_logger()
        caplog.set_level(logging.DEBUG)
        assert normalize_chunk("{broken") is None
    finally:
        sdk_logger.setLevel(previous)

    assert any(r.getMessage() == "Skipped malformed frame" and r.levelno == logging.DEBUG for r in caplog.records)


def test_result_unwrap():
    assert Result.success({"a": 1}).unwrap() == {"a": 1}
    failed = Result.failure(HttpStatusError(500, "boom"))
    assert not failed.ok
    with pytest.raises(HttpStatusError):
        failed.unwrap()
