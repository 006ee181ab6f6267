from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

from dualassist.models import AIResponse, Mode, ReportType, ResponseMetadata, Urgency

_HEALTH_DISCLAIMER = (
    "Please remember this is general information, not medical advice. "
    "A healthcare professional can give you guidance for your specific situation."
)


@dataclass(frozen=True)
class CannedAnswer:
    mode: Mode
    content: str
    suggestions: tuple[str, ...]
    urgency: Urgency = Urgency.LOW
    confidence: float = 0.9

    def to_response(self) -> AIResponse:
        return AIResponse(
            content=self.content,
            metadata=ResponseMetadata(
                mode=self.mode,
                confidence=self.confidence,
                suggestions=list(self.suggestions),
                urgency=self.urgency,
            ),
        )


_EMERGENCY = CannedAnswer(
    mode=Mode.HEALTH,
    urgency=Urgency.EMERGENCY,
    confidence=0.95,
    content=(
        "What you describe can be a sign of a medical emergency. "
        "Please call your local emergency number or go to the nearest emergency room now.\n\n"
        "While you wait for help: stay as calm and still as you can, unlock the door, "
        "and let someone nearby know what is happening. Do not drive yourself.\n\n"
        + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Call emergency services",
        "Tell someone nearby",
        "Keep a list of your medications ready",
    ),
)

_SYMPTOMS = CannedAnswer(
    mode=Mode.HEALTH,
    urgency=Urgency.MEDIUM,
    content=(
        "Thanks for sharing how you feel. Most short-lived symptoms such as a mild headache, "
        "a cold or a low fever improve with rest, fluids and time.\n\n"
        "Keep track of when the symptoms started, how strong they are and anything that makes "
        "them better or worse. See a doctor if they last more than a few days, get worse, "
        "or come with a high fever, a stiff neck or confusion.\n\n"
        + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Log your symptoms daily",
        "Stay hydrated and rest",
        "Book an appointment if symptoms persist",
    ),
)

_SLEEP = CannedAnswer(
    mode=Mode.HEALTH,
    content=(
        "Good sleep starts with a steady rhythm. Try to go to bed and wake up at the same time "
        "every day, including weekends.\n\n"
        "Keep the bedroom dark, cool and quiet, put screens away an hour before bed and avoid "
        "caffeine after lunch. If you lie awake for more than twenty minutes, get up and do "
        "something calm until you feel sleepy.\n\n"
        + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Set a fixed wake-up time",
        "Create a screen-free wind-down routine",
        "Limit caffeine after noon",
    ),
)

_STRESS = CannedAnswer(
    mode=Mode.HEALTH,
    content=(
        "Stress and anxiety are common, and there are simple ways to take the edge off. "
        "Slow breathing (in for four seconds, out for six) calms the nervous system within minutes.\n\n"
        "Regular movement, time outdoors and clear boundaries around work hours help over the "
        "longer term. If work is the main source of pressure, a frank conversation with your "
        "manager about priorities is often worth it.\n\n"
        "If anxiety affects your daily life, a counsellor or doctor can help. " + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Try a five-minute breathing exercise",
        "Schedule short breaks during work",
        "Talk to a counsellor",
    ),
)

_NUTRITION = CannedAnswer(
    mode=Mode.HEALTH,
    content=(
        "A balanced routine beats any quick fix. Aim for vegetables at most meals, enough protein, "
        "whole grains and plenty of water.\n\n"
        "For activity, the common guideline is about 150 minutes of moderate exercise per week "
        "plus two sessions of strength training. Start small and build up gradually.\n\n"
        + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Plan meals for the week",
        "Add a 20-minute walk to your day",
        "Track water intake",
    ),
)

_HEALTH_INTRO = CannedAnswer(
    mode=Mode.HEALTH,
    confidence=0.7,
    content=(
        "I'm your health assistant. I can share general wellness information about symptoms, "
        "sleep, stress, nutrition and fitness.\n\n"
        "Tell me a bit more about what is on your mind and I'll point you in the right direction.\n\n"
        + _HEALTH_DISCLAIMER
    ),
    suggestions=(
        "Ask about better sleep",
        "Ask about managing stress",
        "Describe a symptom",
    ),
)

_RESUME = CannedAnswer(
    mode=Mode.CAREER,
    content=(
        "A strong resume is short, specific and tailored. Lead with a two-line summary that matches "
        "the role you want, then list experience with measurable results "
        "(\"cut processing time by 30%\" rather than \"improved processes\").\n\n"
        "Mirror the key words from the job posting, keep it to one or two pages and make sure the "
        "layout reads cleanly in applicant tracking systems."
    ),
    suggestions=(
        "Quantify three achievements",
        "Tailor your summary to the job posting",
        "Ask a peer to review your resume",
    ),
)

_INTERVIEW = CannedAnswer(
    mode=Mode.CAREER,
    content=(
        "Preparation is the best cure for interview nerves. Research the company, its products "
        "and recent news, and prepare three or four stories using the STAR method "
        "(Situation, Task, Action, Result).\n\n"
        "Practise answers out loud, prepare thoughtful questions for the interviewer and send a "
        "short thank-you note within a day."
    ),
    suggestions=(
        "Write down four STAR stories",
        "Run a mock interview",
        "Prepare questions for the interviewer",
    ),
)

_SALARY = CannedAnswer(
    mode=Mode.CAREER,
    content=(
        "Before negotiating, research market rates for your role, level and location using salary "
        "surveys and peer conversations.\n\n"
        "Anchor on the value you bring, give a researched range rather than a single number and "
        "remember to consider the full package: bonus, equity, leave and learning budget."
    ),
    suggestions=(
        "Collect three salary benchmarks",
        "Prepare your value statement",
        "Practise the negotiation conversation",
    ),
)

_SKILLS = CannedAnswer(
    mode=Mode.CAREER,
    content=(
        "Changing direction or growing your skills works best with a plan. Identify the target role, "
        "list the skills it requires and compare them with what you already have.\n\n"
        "Close the biggest gaps first with focused courses or certifications, and build small "
        "projects you can show. Talking to people already in the role is the fastest way to learn "
        "what really matters."
    ),
    suggestions=(
        "Do a skills gap analysis",
        "Pick one course to start this month",
        "Set up two informational interviews",
    ),
)

_JOB_SEARCH = CannedAnswer(
    mode=Mode.CAREER,
    content=(
        "A focused job search beats mass applications. Choose a short list of target companies and "
        "roles, and keep your LinkedIn profile aligned with that direction.\n\n"
        "Referrals dramatically improve response rates, so reach out to your network, and track "
        "every application so you can follow up after a week."
    ),
    suggestions=(
        "Build a list of ten target companies",
        "Update your LinkedIn headline",
        "Ask for two referrals",
    ),
)

_CAREER_INTRO = CannedAnswer(
    mode=Mode.CAREER,
    confidence=0.7,
    content=(
        "I'm your career assistant. I can help with resumes, interviews, salary negotiation, "
        "skill development and job search strategy.\n\n"
        "Tell me where you are in your career and where you'd like to go."
    ),
    suggestions=(
        "Review my resume",
        "Prepare for an interview",
        "Plan a career change",
    ),
)

FALLBACK_RESPONSES = (
    "That's a great question. I can help with both your career and your health. "
    "Could you tell me a little more so I can give you a useful answer?",
    "I'm here for career guidance and general wellness information. "
    "What would you like to focus on today?",
    "Thanks for reaching out. Are you thinking about your work, your wellbeing, or both?",
    "Many career and health questions are connected, for example stress at work or burnout. "
    "Share some details and we can look at it together.",
)

_EMERGENCY_TOKENS = (
    "chest pain",
    "can't breathe",
    "cannot breathe",
    "trouble breathing",
    "difficulty breathing",
    "heart attack",
    "stroke",
    "unconscious",
    "severe bleeding",
    "suicid",
    "overdose",
)

_HEALTH_TOPICS: tuple[tuple[tuple[str, ...], CannedAnswer], ...] = (
    (
        (
            "symptom",
            "headache",
            "fever",
            "cough",
            "sore throat",
            "nausea",
            "pain",
            "sick",
            "flu",
            "cold",
        ),
        _SYMPTOMS,
    ),
    (("sleep", "insomnia", "tired", "fatigue", "exhausted"), _SLEEP),
    (("stress", "anxiety", "anxious", "burnout", "overwhelm", "panic"), _STRESS),
    (
        ("diet", "nutrition", "meal", "exercise", "workout", "fitness", "weight", "health"),
        _NUTRITION,
    ),
)

_CAREER_TOPICS: tuple[tuple[tuple[str, ...], CannedAnswer], ...] = (
    (("resume", "cv", "cover letter"), _RESUME),
    (("interview",), _INTERVIEW),
    (("salary", "negotiat", "raise", "compensation", "pay"), _SALARY),
    (
        ("career change", "switch career", "skill", "learn", "course", "certification", "promotion"),
        _SKILLS,
    ),
    (("job", "hiring", "apply", "application", "linkedin", "career", "work"), _JOB_SEARCH),
)


def generate_demo_response(
    message: str,
    mode: Mode | str = Mode.DUAL,
    *,
    rng: random.Random | None = None,
) -> AIResponse:
    normalized = message.strip().lower()

    if any(token in normalized for token in _EMERGENCY_TOKENS):
        return _EMERGENCY.to_response()
    for tokens, answer in _HEALTH_TOPICS:
        if any(token in normalized for token in tokens):
            return answer.to_response()
    for tokens, answer in _CAREER_TOPICS:
        if any(token in normalized for token in tokens):
            return answer.to_response()

    if mode == Mode.CAREER:
        return _CAREER_INTRO.to_response()
    if mode == Mode.HEALTH:
        return _HEALTH_INTRO.to_response()

    chooser = rng or random
    return AIResponse(
        content=chooser.choice(FALLBACK_RESPONSES),
        metadata=ResponseMetadata(
            mode=Mode.DUAL,
            confidence=0.5,
            suggestions=["Ask a career question", "Ask a health question"],
            urgency=Urgency.LOW,
        ),
    )


def generate_demo_report(
    report_type: ReportType,
    user_data: dict[str, Any],
) -> tuple[str, dict[str, Any]]:
    conversations = user_data.get("conversations") or []
    profile = user_data.get("profile")
    mode_counts: dict[str, int] = {}
    for item in conversations:
        mode = str(item.get("mode") or Mode.DUAL) if isinstance(item, dict) else str(Mode.DUAL)
        mode_counts[mode] = mode_counts.get(mode, 0) + 1

    recommendations: list[str] = []
    if report_type in {ReportType.CAREER, ReportType.COMBINED}:
        recommendations.extend(
            [
                "Quantify recent achievements on your resume",
                "Schedule one networking conversation per week",
            ]
        )
    if report_type in {ReportType.HEALTH, ReportType.COMBINED}:
        recommendations.extend(
            [
                "Keep a consistent sleep schedule",
                "Add 150 minutes of moderate activity per week",
            ]
        )

    title = f"{report_type.value.capitalize()} Analysis Report"
    content = {
        "summary": (
            f"Based on {len(conversations)} recent conversation(s), here is your "
            f"{report_type.value} overview."
        ),
        "analysis": {
            "conversation_count": len(conversations),
            "modes": mode_counts,
            "profile_completed": profile is not None,
        },
        "recommendations": recommendations,
        "action_items": [f"Review: {item}" for item in recommendations[:3]],
    }
    return title, content
