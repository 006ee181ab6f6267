from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from openai import AsyncOpenAI

from dualassist.services.ai_service import AIService
from dualassist.services.chat_relay import ChatRelay
from dualassist.services.connections import ConnectionRegistry
from dualassist.services.storage import MemoryStorage
from dualassist.startup_self_check import resolve_openai_model


@dataclass
class ServiceContainer:
    storage: MemoryStorage
    ai_service: AIService
    chat_relay: ChatRelay
    connections: ConnectionRegistry
    demo_mode: bool
    openai_model: str
    openai_api_key_configured: bool


def build_container() -> ServiceContainer:
    demo_mode = _parse_bool(getenv("DUAL_DEMO_MODE"), default=True)
    api_key = (getenv("OPENAI_API_KEY") or "").strip() or None
    model = resolve_openai_model(getenv("DUAL_OPENAI_MODEL"))

    client: AsyncOpenAI | None = None
    if not demo_mode and api_key:
        client = AsyncOpenAI(
            api_key=api_key,
            timeout=_parse_float(getenv("DUAL_OPENAI_TIMEOUT_SEC"), default=30.0),
            max_retries=0,
        )

    storage = MemoryStorage()
    ai_service = AIService(client=client, model=model, demo_mode=demo_mode)
    return ServiceContainer(
        storage=storage,
        ai_service=ai_service,
        chat_relay=ChatRelay(
            storage=storage,
            ai_service=ai_service,
            context_window=_parse_int(getenv("DUAL_CONTEXT_WINDOW"), default=10),
        ),
        connections=ConnectionRegistry(),
        demo_mode=ai_service.demo_mode,
        openai_model=model,
        openai_api_key_configured=api_key is not None,
    )


def _parse_int(value: str | None, *, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_float(value: str | None, *, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default
