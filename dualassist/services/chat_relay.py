from __future__ import annotations

import logging
from dataclasses import dataclass

from dualassist.models import AIResponse, Mode, Role, parse_mode
from dualassist.services.ai_service import AIService
from dualassist.services.storage import MemoryStorage

logger = logging.getLogger(__name__)

_TITLE_MAX_CHARS = 50


class ConversationNotFoundError(LookupError):
    def __init__(self, conversation_id: str) -> None:
        super().__init__(f"conversation not found: {conversation_id}")
        self.conversation_id = conversation_id


@dataclass
class ChatTurn:
    conversation_id: str
    response: AIResponse


def conversation_title(message: str) -> str:
    if len(message) <= _TITLE_MAX_CHARS:
        return message
    return message[:_TITLE_MAX_CHARS] + "..."


class ChatRelay:
    """Records one chat turn: user message in, persona reply out, both stored."""

    def __init__(
        self,
        *,
        storage: MemoryStorage,
        ai_service: AIService,
        context_window: int = 10,
    ) -> None:
        self._storage = storage
        self._ai_service = ai_service
        self._context_window = max(context_window, 1)

    async def handle_chat(
        self,
        *,
        user_id: str,
        message: str,
        mode: object,
        conversation_id: str | None = None,
    ) -> ChatTurn:
        resolved_mode = parse_mode(mode)
        if conversation_id:
            if self._storage.get_conversation(conversation_id) is None:
                raise ConversationNotFoundError(conversation_id)
        else:
            conversation = self._storage.create_conversation(
                user_id=user_id,
                title=conversation_title(message),
                mode=resolved_mode,
            )
            conversation_id = conversation.id
            logger.info(
                "conversation_created conversation_id=%s user_id=%s mode=%s",
                conversation_id,
                user_id,
                resolved_mode,
            )

        self._storage.create_message(
            conversation_id=conversation_id,
            role=Role.USER,
            content=message,
        )
        context = self.recent_context(conversation_id)

        response = await self._ai_service.respond(
            mode=resolved_mode,
            message=message,
            context=context,
        )
        self._storage.create_message(
            conversation_id=conversation_id,
            role=Role.ASSISTANT,
            content=response.content,
            metadata=response.metadata.as_dict(),
        )
        return ChatTurn(conversation_id=conversation_id, response=response)

    def recent_context(self, conversation_id: str) -> list[str]:
        history = self._storage.get_messages_by_conversation(conversation_id)
        return [f"{item.role}: {item.content}" for item in history[-self._context_window :]]
