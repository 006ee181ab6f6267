from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status

from dualassist.api.payloads import conversation_payload, profile_payload, report_payload
from dualassist.container import ServiceContainer
from dualassist.models import ReportType
from dualassist.schemas import ProfileUpdateRequest, ReportGenerateRequest

router = APIRouter(prefix="/api", tags=["reports"])
_LOGGER = logging.getLogger(__name__)
_RECENT_CONVERSATIONS = 10


def _get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


@router.post("/reports/generate")
async def generate_report(req: ReportGenerateRequest, request: Request) -> dict[str, object]:
    if not req.user_id or not req.type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID and report type required",
        )
    try:
        report_type = ReportType(req.type)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported report type: {req.type}",
        ) from exc

    container = _get_container(request)
    storage = container.storage
    profile = storage.get_user_profile(req.user_id)
    conversations = storage.get_conversations_by_user(req.user_id)
    user_data = {
        "profile": profile_payload(profile) if profile is not None else None,
        "conversations": [
            conversation_payload(item) for item in conversations[-_RECENT_CONVERSATIONS:]
        ],
    }
    title, content = await container.ai_service.generate_ai_report(
        user_id=req.user_id,
        report_type=report_type,
        user_data=user_data,
    )
    report = storage.create_ai_report(
        user_id=req.user_id,
        report_type=report_type,
        title=title,
        content=content,
    )
    _LOGGER.info(
        "report_generated report_id=%s user_id=%s type=%s",
        report.id,
        report.user_id,
        report.type,
    )
    return report_payload(report)


@router.get("/reports")
def list_reports(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
) -> list[dict[str, object]]:
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")
    reports = _get_container(request).storage.get_ai_reports_by_user(user_id)
    return [report_payload(item) for item in reports]


@router.post("/profile")
def update_profile(req: ProfileUpdateRequest, request: Request) -> dict[str, object]:
    if not req.user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")
    fields = req.model_dump(include={"career_data", "health_data", "preferences"}, exclude_unset=True)
    profile = _get_container(request).storage.create_or_update_user_profile(req.user_id, fields)
    return profile_payload(profile)
