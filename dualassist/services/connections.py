import secrets
import string
from dataclasses import dataclass, field
from datetime import UTC, datetime

_CLIENT_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass
class ClientSession:
    client_id: str
    user_id: str
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    conversation_id: str | None = None


class ConnectionRegistry:
    """In-memory registry of live WebSocket clients."""

    def __init__(self, *, client_id_length: int = 7) -> None:
        self._sessions: dict[str, ClientSession] = {}
        self._client_id_length = max(client_id_length, 4)

    @property
    def count(self) -> int:
        return len(self._sessions)

    def register(self) -> ClientSession:
        client_id = self._new_client_id()
        while client_id in self._sessions:
            client_id = self._new_client_id()
        session = ClientSession(client_id=client_id, user_id=f"demo-user-{client_id}")
        self._sessions[client_id] = session
        return session

    def unregister(self, client_id: str) -> None:
        self._sessions.pop(client_id, None)

    def get(self, client_id: str) -> ClientSession | None:
        return self._sessions.get(client_id)

    def _new_client_id(self) -> str:
        return "".join(
            secrets.choice(_CLIENT_ID_ALPHABET) for _ in range(self._client_id_length)
        )
