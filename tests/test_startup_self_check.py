import logging

import pytest

from dualassist.container import build_container
from dualassist.startup_self_check import analyze_startup_config, run_startup_self_check


def test_demo_mode_has_no_issues_without_key() -> None:
    result = analyze_startup_config(demo_mode_requested=True, api_key=None, model="gpt-4o")

    assert result.issues == []
    assert result.openai_api_key_configured is False
    assert result.demo_mode_forced is False


def test_live_mode_without_key_forces_demo() -> None:
    result = analyze_startup_config(demo_mode_requested=False, api_key="  ", model="gpt-4o")

    assert result.issues == ["openai_api_key_missing"]
    assert result.demo_mode_forced is True


def test_live_mode_with_blank_model() -> None:
    result = analyze_startup_config(demo_mode_requested=False, api_key="sk-test", model="")

    assert result.issues == ["openai_model_unset"]
    assert result.openai_api_key_configured is True
    assert result.openai_model == "gpt-4o"


def test_run_startup_self_check_logs_warning(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("DUAL_DEMO_MODE", "off")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    logger = logging.getLogger("test.startup")

    with caplog.at_level(logging.WARNING, logger="test.startup"):
        result = run_startup_self_check(logger=logger)

    assert "openai_api_key_missing" in result.issues
    assert "anomaly=openai_api_key_missing" in caplog.text


def test_configured_model_is_reported() -> None:
    result = analyze_startup_config(demo_mode_requested=False, api_key="sk-test", model=" gpt-4o-mini ")

    assert result.issues == []
    assert result.openai_model == "gpt-4o-mini"


def test_blank_model_env_agrees_with_container(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setenv("DUAL_DEMO_MODE", "off")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("DUAL_OPENAI_MODEL", "   ")
    logger = logging.getLogger("test.startup")

    with caplog.at_level(logging.WARNING, logger="test.startup"):
        result = run_startup_self_check(logger=logger)
    container = build_container()

    assert result.issues == ["openai_model_unset"]
    assert result.openai_model == container.openai_model == "gpt-4o"
    assert "model=gpt-4o" in caplog.text
