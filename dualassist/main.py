import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dualassist.api.payloads import conversation_payload, message_payload
from dualassist.api.reports import router as reports_router
from dualassist.api.ws import router as ws_router
from dualassist.container import build_container
from dualassist.schemas import ChatRequest, ChatResponse
from dualassist.startup_self_check import run_startup_self_check

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):  # type: ignore[no-untyped-def]
    _app.state.startup_self_check = run_startup_self_check(logger=logger)
    _app.state.started_at = datetime.now(UTC).isoformat()
    yield


app = FastAPI(title="Dual Assistant Backend", version="0.1.0", lifespan=lifespan)
app.state.container = build_container()


@app.middleware("http")
async def attach_trace_id(request: Request, call_next):  # type: ignore[no-untyped-def]
    trace_id = request.headers.get("x-trace-id") or str(uuid4())
    request.state.trace_id = trace_id
    response = await call_next(request)
    response.headers["x-trace-id"] = trace_id
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid path=%s errors=%s", request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", None) or request.headers.get("x-trace-id") or str(uuid4())
    logger.error("request_failed path=%s trace_id=%s", request.url.path, trace_id, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
        headers={"x-trace-id": trace_id},
    )


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok", "service": "dual-assistant-backend"}


@app.get("/api/runtime")
def runtime() -> dict[str, object]:
    container = app.state.container
    startup = getattr(app.state, "startup_self_check", None)
    return {
        "service": "dual-assistant-backend",
        "demo_mode": container.demo_mode,
        "model": container.ai_service.model_name,
        "openai_api_key_configured": container.openai_api_key_configured,
        "connections": container.connections.count,
        "storage": container.storage.stats(),
        "started_at": getattr(app.state, "started_at", None),
        "startup_issues": startup.issues if startup is not None else [],
    }


@app.post("/api/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, request: Request) -> dict[str, object]:
    trace_id = getattr(request.state, "trace_id", str(uuid4()))
    container = app.state.container
    logger.info("chat_request trace_id=%s mode=%s chars=%s", trace_id, req.mode, len(req.message))
    # Stateless: an existing conversation only contributes context, nothing is stored.
    context = (
        container.chat_relay.recent_context(req.conversation_id) if req.conversation_id else None
    )
    response = await container.ai_service.respond(
        mode=req.mode,
        message=req.message,
        context=context or None,
    )
    return response.as_dict()


@app.get("/api/conversations")
def list_conversations(user_id: str | None = Query(default=None, alias="userId")) -> list[dict[str, object]]:
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")
    conversations = app.state.container.storage.get_conversations_by_user(user_id)
    return [conversation_payload(item) for item in conversations]


@app.get("/api/conversations/{conversation_id}/messages")
def conversation_messages(conversation_id: str) -> list[dict[str, object]]:
    messages = app.state.container.storage.get_messages_by_conversation(conversation_id)
    return [message_payload(item) for item in messages]


app.include_router(reports_router)
app.include_router(ws_router)
