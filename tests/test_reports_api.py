import pytest
from fastapi.testclient import TestClient

from dualassist.container import build_container
from dualassist.main import app
from dualassist.models import Mode

client = TestClient(app)


@pytest.fixture(autouse=True)
def _reset_container(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DUAL_DEMO_MODE", "true")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    app.state.container = build_container()


def test_generate_report_requires_user_and_type() -> None:
    response = client.post("/api/reports/generate", json={"userId": "u_1"})

    assert response.status_code == 400
    assert response.json() == {"error": "User ID and report type required"}


def test_generate_report_rejects_unknown_type() -> None:
    response = client.post("/api/reports/generate", json={"userId": "u_1", "type": "finance"})

    assert response.status_code == 400
    assert "finance" in response.json()["error"]


def test_generate_report_stores_demo_report() -> None:
    storage = app.state.container.storage
    storage.create_conversation(user_id="u_rep", title="resume help", mode=Mode.CAREER)
    storage.create_conversation(user_id="u_rep", title="sleep", mode=Mode.HEALTH)

    response = client.post("/api/reports/generate", json={"userId": "u_rep", "type": "combined"})
    body = response.json()

    assert response.status_code == 200
    assert body["title"] == "Combined Analysis Report"
    assert body["type"] == "combined"
    assert body["userId"] == "u_rep"
    assert body["content"]["analysis"]["conversation_count"] == 2
    assert body["content"]["analysis"]["modes"] == {"career": 1, "health": 1}
    assert body["content"]["recommendations"]
    assert len(storage.get_ai_reports_by_user("u_rep")) == 1


def test_list_reports_requires_user_id() -> None:
    response = client.get("/api/reports")

    assert response.status_code == 400
    assert response.json() == {"error": "User ID required"}


def test_list_reports_newest_first() -> None:
    client.post("/api/reports/generate", json={"userId": "u_list", "type": "career"})
    client.post("/api/reports/generate", json={"userId": "u_list", "type": "health"})

    response = client.get("/api/reports", params={"userId": "u_list"})
    body = response.json()

    assert response.status_code == 200
    assert [item["type"] for item in body] == ["health", "career"]


def test_profile_requires_user_id() -> None:
    response = client.post("/api/profile", json={"careerData": {"role": "engineer"}})

    assert response.status_code == 400
    assert response.json() == {"error": "User ID required"}


def test_profile_create_then_merge() -> None:
    created = client.post(
        "/api/profile",
        json={
            "userId": "u_prof",
            "careerData": {"role": "engineer"},
            "preferences": {"language": "en"},
        },
    ).json()

    updated = client.post(
        "/api/profile",
        json={"userId": "u_prof", "healthData": {"goal": "sleep better"}},
    ).json()

    assert updated["id"] == created["id"]
    assert updated["careerData"] == {"role": "engineer"}
    assert updated["healthData"] == {"goal": "sleep better"}
    assert updated["preferences"] == {"language": "en"}
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] >= created["updatedAt"]


def test_report_includes_profile_flag() -> None:
    client.post("/api/profile", json={"userId": "u_flag", "careerData": {"role": "nurse"}})

    body = client.post("/api/reports/generate", json={"userId": "u_flag", "type": "health"}).json()

    assert body["content"]["analysis"]["profile_completed"] is True
