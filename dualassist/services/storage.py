from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from dualassist.models import (
    AiReport,
    Conversation,
    Message,
    Mode,
    ReportType,
    Role,
    User,
    UserProfile,
)

_PROFILE_FIELDS = ("career_data", "health_data", "preferences")


class MemoryStorage:
    """In-memory datastore. Single process only, nothing is persisted."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._conversations: dict[str, Conversation] = {}
        self._messages: dict[str, Message] = {}
        self._profiles: dict[str, UserProfile] = {}
        self._reports: dict[str, AiReport] = {}

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, *, username: str, email: str, password: str) -> User:
        user = User(
            id=str(uuid4()),
            username=username,
            email=email,
            password=password,
            created_at=datetime.now(UTC),
        )
        self._users[user.id] = user
        return user

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        return self._conversations.get(conversation_id)

    def get_conversations_by_user(self, user_id: str) -> list[Conversation]:
        return [item for item in self._conversations.values() if item.user_id == user_id]

    def create_conversation(self, *, user_id: str, title: str, mode: Mode) -> Conversation:
        conversation = Conversation(
            id=str(uuid4()),
            user_id=user_id,
            title=title,
            mode=mode,
            created_at=datetime.now(UTC),
        )
        self._conversations[conversation.id] = conversation
        return conversation

    def get_messages_by_conversation(self, conversation_id: str) -> list[Message]:
        # sorted() is stable, so equal timestamps keep insertion order.
        return sorted(
            (item for item in self._messages.values() if item.conversation_id == conversation_id),
            key=lambda item: item.created_at,
        )

    def create_message(
        self,
        *,
        conversation_id: str,
        role: Role,
        content: str,
        metadata: dict[str, Any] | None = None,
    ) -> Message:
        message = Message(
            id=str(uuid4()),
            conversation_id=conversation_id,
            role=role,
            content=content,
            metadata=metadata,
            created_at=datetime.now(UTC),
        )
        self._messages[message.id] = message
        return message

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        for profile in self._profiles.values():
            if profile.user_id == user_id:
                return profile
        return None

    def create_or_update_user_profile(self, user_id: str, fields: dict[str, Any]) -> UserProfile:
        """Create the profile, or merge only the supplied fields into the existing one."""
        unknown = set(fields) - set(_PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"unknown profile fields: {sorted(unknown)}")
        now = datetime.now(UTC)
        existing = self.get_user_profile(user_id)
        if existing is None:
            profile = UserProfile(
                id=str(uuid4()),
                user_id=user_id,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._profiles[profile.id] = profile
            return profile
        for name, value in fields.items():
            setattr(existing, name, value)
        existing.updated_at = now
        return existing

    def get_ai_reports_by_user(self, user_id: str) -> list[AiReport]:
        reports = [item for item in self._reports.values() if item.user_id == user_id]
        # Reverse insertion first so same-timestamp reports still come out newest first.
        reports.reverse()
        return sorted(reports, key=lambda item: item.created_at, reverse=True)

    def create_ai_report(
        self,
        *,
        user_id: str,
        report_type: ReportType,
        title: str,
        content: dict[str, Any],
    ) -> AiReport:
        report = AiReport(
            id=str(uuid4()),
            user_id=user_id,
            type=report_type,
            title=title,
            content=content,
            created_at=datetime.now(UTC),
        )
        self._reports[report.id] = report
        return report

    def stats(self) -> dict[str, int]:
        return {
            "users": len(self._users),
            "conversations": len(self._conversations),
            "messages": len(self._messages),
            "profiles": len(self._profiles),
            "reports": len(self._reports),
        }
