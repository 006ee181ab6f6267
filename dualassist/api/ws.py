from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from dualassist.container import ServiceContainer
from dualassist.schemas import WsAuthEnvelope, WsChatEnvelope
from dualassist.services.connections import ClientSession

router = APIRouter(tags=["ws"])
_LOGGER = logging.getLogger(__name__)

CONNECTED_ENVELOPE = {"type": "connected", "message": "WebSocket connection established"}
ERROR_ENVELOPE = {"type": "error", "message": "Failed to process message"}


def _get_container(websocket: WebSocket) -> ServiceContainer:
    return websocket.app.state.container


def _frame_text(frame: dict[str, Any]) -> str:
    text = frame.get("text")
    if text is not None:
        return text
    data = frame.get("bytes")
    if data is None:
        raise ValueError("frame carries no payload")
    return data.decode("utf-8")


async def handle_envelope(
    *,
    container: ServiceContainer,
    session: ClientSession,
    raw: str,
) -> dict[str, Any] | None:
    """Process one inbound frame. Returns the outbound envelope, or None when nothing is sent."""
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("envelope must be a JSON object")

    envelope_type = payload.get("type")
    if envelope_type == "chat":
        envelope = WsChatEnvelope.model_validate(payload)
        turn = await container.chat_relay.handle_chat(
            user_id=session.user_id,
            message=envelope.message,
            mode=envelope.mode,
            conversation_id=envelope.conversation_id,
        )
        session.conversation_id = turn.conversation_id
        return {
            "type": "chat_response",
            "content": turn.response.content,
            "metadata": turn.response.metadata.as_dict(),
            "conversationId": turn.conversation_id,
        }
    if envelope_type == "auth":
        envelope = WsAuthEnvelope.model_validate(payload)
        _LOGGER.info(
            "ws_auth client_id=%s previous_user_id=%s user_id=%s",
            session.client_id,
            session.user_id,
            envelope.user_id,
        )
        session.user_id = envelope.user_id
        return None

    _LOGGER.debug("ws_ignored client_id=%s type=%s", session.client_id, envelope_type)
    return None


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket) -> None:
    container = _get_container(websocket)
    await websocket.accept()
    session = container.connections.register()
    _LOGGER.info(
        "ws_connected client_id=%s user_id=%s active=%s",
        session.client_id,
        session.user_id,
        container.connections.count,
    )
    try:
        await websocket.send_json(CONNECTED_ENVELOPE)
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(code=frame.get("code", 1000))
            try:
                raw = _frame_text(frame)
                reply = await handle_envelope(container=container, session=session, raw=raw)
            except Exception:  # noqa: BLE001
                _LOGGER.exception("ws_message_failed client_id=%s", session.client_id)
                reply = ERROR_ENVELOPE
            if reply is not None:
                await websocket.send_json(reply)
    except WebSocketDisconnect:
        _LOGGER.info("ws_disconnected client_id=%s", session.client_id)
    finally:
        container.connections.unregister(session.client_id)
