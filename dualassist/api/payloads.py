from __future__ import annotations

from dualassist.models import AiReport, Conversation, Message, UserProfile


def conversation_payload(item: Conversation) -> dict[str, object]:
    return {
        "id": item.id,
        "userId": item.user_id,
        "title": item.title,
        "mode": str(item.mode),
        "createdAt": item.created_at.isoformat(),
    }


def message_payload(item: Message) -> dict[str, object]:
    return {
        "id": item.id,
        "conversationId": item.conversation_id,
        "role": str(item.role),
        "content": item.content,
        "metadata": item.metadata,
        "createdAt": item.created_at.isoformat(),
    }


def profile_payload(item: UserProfile) -> dict[str, object]:
    return {
        "id": item.id,
        "userId": item.user_id,
        "careerData": item.career_data,
        "healthData": item.health_data,
        "preferences": item.preferences,
        "createdAt": item.created_at.isoformat(),
        "updatedAt": item.updated_at.isoformat(),
    }


def report_payload(item: AiReport) -> dict[str, object]:
    return {
        "id": item.id,
        "userId": item.user_id,
        "type": str(item.type),
        "title": item.title,
        "content": item.content,
        "createdAt": item.created_at.isoformat(),
    }
