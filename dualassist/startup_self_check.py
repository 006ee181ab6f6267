from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_OPENAI_MODEL = "gpt-4o"


@dataclass(frozen=True)
class StartupSelfCheckResult:
    demo_mode_requested: bool
    openai_api_key_configured: bool
    issues: list[str]
    demo_mode_forced: bool = False
    openai_model: str = DEFAULT_OPENAI_MODEL


def resolve_openai_model(value: str | None) -> str:
    """Blank or unset model names resolve to the default."""
    return (value or "").strip() or DEFAULT_OPENAI_MODEL


def run_startup_self_check(logger: logging.Logger) -> StartupSelfCheckResult:
    result = analyze_startup_config(
        demo_mode_requested=_parse_bool_env("DUAL_DEMO_MODE", default=True),
        api_key=os.getenv("OPENAI_API_KEY"),
        model=os.getenv("DUAL_OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
    )

    if "openai_api_key_missing" in result.issues:
        logger.warning(
            "startup_self_check anomaly=openai_api_key_missing "
            "detail=live_mode_requested_falling_back_to_demo"
        )
    if "openai_model_unset" in result.issues:
        logger.warning(
            "startup_self_check anomaly=openai_model_unset detail=using_default model=%s",
            result.openai_model,
        )
    if not result.issues:
        logger.info(
            "startup_self_check ok demo_mode=%s",
            result.demo_mode_requested or result.demo_mode_forced,
        )
    return result


def analyze_startup_config(
    *,
    demo_mode_requested: bool,
    api_key: str | None,
    model: str | None,
) -> StartupSelfCheckResult:
    issues: list[str] = []
    key_configured = bool((api_key or "").strip())
    demo_mode_forced = False

    if not demo_mode_requested:
        if not key_configured:
            issues.append("openai_api_key_missing")
            demo_mode_forced = True
        if not (model or "").strip():
            issues.append("openai_model_unset")

    return StartupSelfCheckResult(
        demo_mode_requested=demo_mode_requested,
        openai_api_key_configured=key_configured,
        issues=issues,
        demo_mode_forced=demo_mode_forced,
        openai_model=resolve_openai_model(model),
    )


def _parse_bool_env(name: str, *, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default
