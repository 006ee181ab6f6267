from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class Mode(StrEnum):
    CAREER = "career"
    HEALTH = "health"
    DUAL = "dual"


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class Urgency(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"


class ReportType(StrEnum):
    CAREER = "career"
    HEALTH = "health"
    COMBINED = "combined"


def parse_mode(value: object) -> Mode:
    """Unknown or empty modes fall back to dual."""
    if not value:
        return Mode.DUAL
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        return Mode.DUAL


@dataclass
class User:
    id: str
    username: str
    email: str
    password: str
    created_at: datetime


@dataclass
class Conversation:
    id: str
    user_id: str
    title: str
    mode: Mode
    created_at: datetime


@dataclass
class Message:
    id: str
    conversation_id: str
    role: Role
    content: str
    created_at: datetime
    metadata: dict[str, Any] | None = None


@dataclass
class UserProfile:
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    career_data: dict[str, Any] | None = None
    health_data: dict[str, Any] | None = None
    preferences: dict[str, Any] | None = None


@dataclass
class AiReport:
    id: str
    user_id: str
    type: ReportType
    title: str
    content: dict[str, Any]
    created_at: datetime


@dataclass
class ResponseMetadata:
    mode: Mode
    confidence: float
    suggestions: list[str] = field(default_factory=list)
    urgency: Urgency = Urgency.LOW

    def as_dict(self) -> dict[str, Any]:
        return {
            "mode": str(self.mode),
            "confidence": self.confidence,
            "suggestions": list(self.suggestions),
            "urgency": str(self.urgency),
        }


@dataclass
class AIResponse:
    content: str
    metadata: ResponseMetadata

    def as_dict(self) -> dict[str, Any]:
        return {"content": self.content, "metadata": self.metadata.as_dict()}
