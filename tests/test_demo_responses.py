import random

from dualassist.intelligence.demo_responses import (
    FALLBACK_RESPONSES,
    generate_demo_report,
    generate_demo_response,
)
from dualassist.models import Mode, ReportType, Urgency


def test_emergency_phrases_take_priority() -> None:
    response = generate_demo_response("I have chest pain before my job interview", Mode.CAREER)

    assert response.metadata.mode == Mode.HEALTH
    assert response.metadata.urgency == Urgency.EMERGENCY
    assert "emergency" in response.content.lower()


def test_health_keywords_checked_before_career() -> None:
    response = generate_demo_response("Work stress is ruining my career", Mode.CAREER)

    assert response.metadata.mode == Mode.HEALTH
    assert "not medical advice" in response.content


def test_symptom_answer_has_medium_urgency() -> None:
    response = generate_demo_response("I have a headache and a fever", Mode.DUAL)

    assert response.metadata.urgency == Urgency.MEDIUM


def test_career_topics_in_order() -> None:
    assert "resume" in generate_demo_response("Can you check my CV?").content.lower()
    assert "star" in generate_demo_response("Interview tomorrow!").content.lower()
    assert "negotiat" in generate_demo_response("Should I ask for a raise?").content.lower()
    assert "skills" in generate_demo_response("I want to learn data science").content.lower()
    assert "job search" in generate_demo_response("Looking for a new job").content.lower()


def test_matching_is_case_insensitive() -> None:
    response = generate_demo_response("INSOMNIA again", Mode.DUAL)

    assert response.metadata.mode == Mode.HEALTH
    assert "sleep" in response.content.lower()


def test_mode_breaks_tie_when_no_keyword_matches() -> None:
    career = generate_demo_response("hello there", Mode.CAREER)
    health = generate_demo_response("hello there", Mode.HEALTH)

    assert career.metadata.mode == Mode.CAREER
    assert "career assistant" in career.content
    assert health.metadata.mode == Mode.HEALTH
    assert "health assistant" in health.content


def test_dual_mode_falls_back_to_random_pool() -> None:
    response = generate_demo_response("hello there", Mode.DUAL, rng=random.Random(7))

    assert response.content in FALLBACK_RESPONSES
    assert response.metadata.mode == Mode.DUAL
    assert response.metadata.confidence < 0.9


def test_fallback_selection_is_reproducible_with_seed() -> None:
    first = generate_demo_response("hmm", "dual", rng=random.Random(3))
    second = generate_demo_response("hmm", "dual", rng=random.Random(3))

    assert first.content == second.content


def test_fallback_pool_is_used_uniformly() -> None:
    rng = random.Random(11)
    seen = {generate_demo_response("hmm", Mode.DUAL, rng=rng).content for _ in range(200)}

    assert seen == set(FALLBACK_RESPONSES)


def test_demo_report_summarises_conversations() -> None:
    title, content = generate_demo_report(
        ReportType.CAREER,
        {
            "profile": None,
            "conversations": [{"mode": "career"}, {"mode": "career"}, {"mode": "dual"}],
        },
    )

    assert title == "Career Analysis Report"
    assert content["analysis"]["modes"] == {"career": 2, "dual": 1}
    assert content["analysis"]["profile_completed"] is False
    assert all("sleep" not in item for item in content["recommendations"])
    assert content["action_items"]


def test_combined_report_has_both_domains() -> None:
    _, content = generate_demo_report(ReportType.COMBINED, {"conversations": []})

    assert len(content["recommendations"]) == 4
    assert content["analysis"]["conversation_count"] == 0
