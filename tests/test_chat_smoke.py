from __future__ import annotations

import json

import httpx

from scripts.chat_smoke import run_smoke


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/healthz":
        return httpx.Response(200, json={"status": "ok"})
    if request.url.path == "/api/runtime":
        return httpx.Response(200, json={"demo_mode": True})
    if request.url.path == "/api/chat":
        body = json.loads(request.content)
        return httpx.Response(200, json={"content": f"echo {body['message']}", "metadata": {}})
    if request.url.path == "/api/profile":
        return httpx.Response(200, json={"id": "p_1"})
    return httpx.Response(500, json={"error": "Failed to generate report"})


def test_run_smoke_collects_results() -> None:
    with httpx.Client(transport=httpx.MockTransport(_handler)) as client:
        results = run_smoke(
            client=client,
            base_url="http://testserver/",
            message="hi",
            mode="dual",
            user_id="u_smoke",
        )

    by_name = {item.name: item for item in results}
    assert by_name["health"].ok is True
    assert by_name["chat"].data == {"content": "echo hi", "metadata": {}}
    assert by_name["report"].ok is False
    assert by_name["report"].error == "http_500"


def test_run_smoke_reports_transport_errors() -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(_boom)) as client:
        results = run_smoke(
            client=client,
            base_url="http://testserver",
            message="hi",
            mode="career",
            user_id="u_smoke",
        )

    assert all(item.ok is False for item in results)
    assert all(item.status_code is None for item in results)
    assert results[0].error is not None
    assert results[0].error.startswith("request_error")
