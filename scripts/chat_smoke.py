#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class EndpointResult:
    name: str
    path: str
    ok: bool
    status_code: int | None
    data: Any
    error: str | None


def _call_json(
    *,
    client: httpx.Client,
    base_url: str,
    name: str,
    method: str,
    path: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> EndpointResult:
    url = f"{base_url.rstrip('/')}{path}"
    try:
        resp = client.request(method, url, params=params, json=body)
    except httpx.HTTPError as exc:
        return EndpointResult(
            name=name,
            path=path,
            ok=False,
            status_code=None,
            data=None,
            error=f"request_error: {exc}",
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        return EndpointResult(
            name=name,
            path=path,
            ok=False,
            status_code=resp.status_code,
            data=None,
            error=f"json_error: {exc}",
        )

    return EndpointResult(
        name=name,
        path=path,
        ok=resp.status_code == 200,
        status_code=resp.status_code,
        data=payload,
        error=None if resp.status_code == 200 else f"http_{resp.status_code}",
    )


def run_smoke(
    *,
    client: httpx.Client,
    base_url: str,
    message: str,
    mode: str,
    user_id: str,
) -> list[EndpointResult]:
    return [
        _call_json(client=client, base_url=base_url, name="health", method="GET", path="/healthz"),
        _call_json(client=client, base_url=base_url, name="runtime", method="GET", path="/api/runtime"),
        _call_json(
            client=client,
            base_url=base_url,
            name="chat",
            method="POST",
            path="/api/chat",
            body={"message": message, "mode": mode},
        ),
        _call_json(
            client=client,
            base_url=base_url,
            name="profile",
            method="POST",
            path="/api/profile",
            body={"userId": user_id, "preferences": {"language": "en"}},
        ),
        _call_json(
            client=client,
            base_url=base_url,
            name="report",
            method="POST",
            path="/api/reports/generate",
            body={"userId": user_id, "type": "combined"},
        ),
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exercise a running dual assistant backend")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--timeout-sec", type=float, default=30.0)
    parser.add_argument("--message", default="How do I prepare for a job interview?")
    parser.add_argument("--mode", choices=["career", "health", "dual"], default="dual")
    parser.add_argument("--user-id", default="smoke-user")
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    timeout = httpx.Timeout(timeout=args.timeout_sec)
    with httpx.Client(timeout=timeout) as client:
        results = run_smoke(
            client=client,
            base_url=args.base_url,
            message=args.message,
            mode=args.mode,
            user_id=args.user_id,
        )

    for item in results:
        status = "ok" if item.ok else f"FAIL ({item.error})"
        print(f"[{item.name}] {item.path} -> {status}")
        if item.data is not None:
            print(json.dumps(item.data, ensure_ascii=False, indent=2))
    if not all(item.ok for item in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
