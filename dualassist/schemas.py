from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    mode: Literal["career", "health", "dual"]
    conversation_id: str | None = Field(default=None, alias="conversationId", max_length=128)


class ChatMetadata(BaseModel):
    mode: str
    confidence: float
    suggestions: list[str] = Field(default_factory=list)
    urgency: Literal["low", "medium", "high", "emergency"] = "low"


class ChatResponse(BaseModel):
    content: str
    metadata: ChatMetadata


class ReportGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId", max_length=128)
    type: str | None = Field(default=None, max_length=32)


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId", max_length=128)
    career_data: dict[str, Any] | None = Field(default=None, alias="careerData")
    health_data: dict[str, Any] | None = Field(default=None, alias="healthData")
    preferences: dict[str, Any] | None = None


class WsChatEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["chat"]
    message: str = Field(min_length=1)
    mode: Any = None
    conversation_id: str | None = Field(default=None, alias="conversationId", max_length=128)


class WsAuthEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["auth"]
    user_id: str = Field(min_length=1, max_length=128, alias="userId")
