from __future__ import annotations

import json
import logging
import random
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from dualassist.intelligence.demo_responses import generate_demo_report, generate_demo_response
from dualassist.models import AIResponse, Mode, ReportType, ResponseMetadata, Urgency, parse_mode

logger = logging.getLogger(__name__)

_NEW_CONVERSATION = "This is the start of a new conversation."

_CAREER_PROMPT = """You are CareerBot, an expert AI career advisor. You provide personalized career guidance, job recommendations, skill assessments, interview preparation, and salary insights. Always be encouraging, professional, and data-driven in your responses.

Context about current conversation: {context}

Guidelines:
- Provide actionable, specific advice
- Reference current market trends when relevant
- Be encouraging but realistic
- Ask follow-up questions to better understand the user's situation
- Suggest concrete next steps
- Format responses as JSON with content and metadata"""

_HEALTH_PROMPT = """You are HealthBot, an AI health advisor providing general wellness guidance and health information. You help with symptom analysis, health risk assessment, medication information, and wellness tips.

IMPORTANT DISCLAIMERS:
- Always remind users that you provide general information only
- Emphasize consulting healthcare professionals for medical concerns
- Never diagnose conditions or provide specific medical advice
- For emergency symptoms, direct users to seek immediate medical attention

Context about current conversation: {context}

Guidelines:
- Provide general health information and wellness tips
- Ask relevant questions to understand symptoms or concerns
- Suggest when professional medical attention is needed
- Be empathetic and supportive
- Include urgency level in metadata (emergency for serious symptoms)
- Format responses as JSON with content and metadata"""

_DUAL_PROMPT = """You are the AI Dual Assistant, capable of providing both career and health guidance. Analyze the user's message to determine whether they need career advice, health information, or both.

Context about current conversation: {context}

Guidelines:
- Determine if the question is primarily career-focused, health-focused, or both
- Provide comprehensive responses that address all aspects of the question
- For health information, include appropriate disclaimers
- For career advice, be data-driven and actionable
- If the topic relates to both domains (e.g., work stress affecting health), address both aspects
- Format responses as JSON with content and metadata
- Set mode to 'career', 'health', or 'dual' based on the question"""

_REPORT_PROMPT = """Generate a comprehensive AI report for the user based on their conversation history and profile data. Create a detailed analysis with actionable insights, recommendations, and next steps.

Report Type: {report_type}
User Data: {user_data}

Format the response as JSON with:
- title: A descriptive title for the report
- content: Detailed report content with sections like summary, analysis, recommendations, action_items
- Make it professional and actionable
- Include specific metrics and insights where relevant"""

_DEFAULT_CONTENT = {
    Mode.CAREER: (
        "I'm here to help with your career questions. "
        "Could you provide more details about what you'd like to discuss?"
    ),
    Mode.HEALTH: (
        "I'm here to provide general health information and wellness guidance. "
        "Please remember that I cannot replace professional medical advice. "
        "What health topic would you like to discuss?"
    ),
    Mode.DUAL: "I'm your dual AI assistant for both career and health guidance. How can I help you today?",
}

_APOLOGY_CONTENT = {
    Mode.CAREER: (
        "I apologize, but I'm having trouble processing your career question right now. "
        "Please try again or rephrase your question."
    ),
    Mode.HEALTH: (
        "I apologize, but I'm having trouble processing your health question right now. "
        "For any urgent health concerns, please contact a healthcare professional immediately."
    ),
    Mode.DUAL: (
        "I'm having trouble processing your question right now. "
        "I'm here to help with both career and health topics. Could you please try again?"
    ),
}


class AIService:
    """Persona-based response generation backed by chat completions, or canned demo answers."""

    def __init__(
        self,
        *,
        client: AsyncOpenAI | None = None,
        model: str = "gpt-4o",
        demo_mode: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._demo_mode = demo_mode
        self._rng = rng

    @property
    def model_name(self) -> str:
        return "demo/canned" if self.demo_mode else self._model

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode or self._client is None

    async def respond(
        self,
        *,
        mode: Mode | str,
        message: str,
        context: list[str] | None = None,
    ) -> AIResponse:
        resolved = parse_mode(mode)
        if resolved == Mode.CAREER:
            return await self.generate_career_response(message, context)
        if resolved == Mode.HEALTH:
            return await self.generate_health_response(message, context)
        return await self.generate_dual_response(message, context)

    async def generate_career_response(
        self, message: str, context: list[str] | None = None
    ) -> AIResponse:
        return await self._generate(
            mode=Mode.CAREER,
            prompt=_CAREER_PROMPT,
            temperature=0.7,
            message=message,
            context=context,
        )

    async def generate_health_response(
        self, message: str, context: list[str] | None = None
    ) -> AIResponse:
        return await self._generate(
            mode=Mode.HEALTH,
            prompt=_HEALTH_PROMPT,
            temperature=0.6,
            message=message,
            context=context,
        )

    async def generate_dual_response(
        self, message: str, context: list[str] | None = None
    ) -> AIResponse:
        return await self._generate(
            mode=Mode.DUAL,
            prompt=_DUAL_PROMPT,
            temperature=0.7,
            message=message,
            context=context,
        )

    async def generate_ai_report(
        self,
        *,
        user_id: str,
        report_type: ReportType,
        user_data: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        if self.demo_mode:
            return generate_demo_report(report_type, user_data)

        system_prompt = _REPORT_PROMPT.format(
            report_type=report_type.value,
            user_data=json.dumps(user_data, ensure_ascii=False, default=str),
        )
        try:
            result = await self._complete_json(
                system_prompt=system_prompt,
                user_message=f"Generate a {report_type.value} report for this user.",
                temperature=0.5,
            )
        except (OpenAIError, ValueError):
            logger.exception("report_generation_failed user_id=%s type=%s", user_id, report_type)
            return "Report Generation Error", {
                "error": "Unable to generate report at this time. Please try again later."
            }

        title = result.get("title") or f"{report_type.value.capitalize()} Analysis Report"
        content = result.get("content") or {
            "summary": "Report generation in progress. Please try again."
        }
        if not isinstance(content, dict):
            content = {"summary": str(content)}
        return str(title), content

    async def _generate(
        self,
        *,
        mode: Mode,
        prompt: str,
        temperature: float,
        message: str,
        context: list[str] | None,
    ) -> AIResponse:
        if self.demo_mode:
            return generate_demo_response(message, mode, rng=self._rng)

        system_prompt = prompt.format(context="\n".join(context) if context else _NEW_CONVERSATION)
        try:
            result = await self._complete_json(
                system_prompt=system_prompt,
                user_message=message,
                temperature=temperature,
            )
        except (OpenAIError, ValueError):
            logger.exception("completion_failed mode=%s model=%s", mode, self._model)
            return AIResponse(
                content=_APOLOGY_CONTENT[mode],
                metadata=ResponseMetadata(mode=mode, confidence=0.0, urgency=Urgency.LOW),
            )

        response_mode = parse_mode(result.get("mode")) if mode == Mode.DUAL else mode
        return AIResponse(
            content=str(result.get("content") or _DEFAULT_CONTENT[mode]),
            metadata=ResponseMetadata(
                mode=response_mode,
                confidence=_as_confidence(result.get("confidence")),
                suggestions=_as_suggestions(result.get("suggestions")),
                urgency=_as_urgency(result.get("urgency")),
            ),
        )

    async def _complete_json(
        self,
        *,
        system_prompt: str,
        user_message: str,
        temperature: float,
    ) -> dict[str, Any]:
        assert self._client is not None
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
        if not response.choices:
            raise ValueError("completion returned no choices")
        raw = response.choices[0].message.content or "{}"
        # json.JSONDecodeError is a ValueError subclass.
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("completion did not return a JSON object")
        return data


def _as_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return 0.8
    return float(value)


def _as_suggestions(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if str(item).strip()]


def _as_urgency(value: Any) -> Urgency:
    try:
        return Urgency(str(value).strip().lower())
    except ValueError:
        return Urgency.LOW
