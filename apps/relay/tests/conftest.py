from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from relay.config import RelayConfig

SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


class RecordingHandler:
    """httpx.MockTransport handler that remembers every outbound request."""

    def __init__(
        self,
        status_code: int = 200,
        error: Exception | None = None,
        failing_hosts: tuple[str, ...] = (),
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.failing_hosts = failing_hosts
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.host in self.failing_hosts:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status_code, text="ok")

    def json_bodies(self, host: str | None = None) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if host is None or r.url.host == host
        ]


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


def make_config(**env: str) -> RelayConfig:
    values = {"SLACKURL": SLACK_URL}
    values.update(env)
    return RelayConfig.from_env(values)


def pull_request(
    number: int = 42,
    title: str = "Add widget",
    author: str = "alice",
    assignees: list[str] | None = None,
    body: str = "",
) -> dict[str, Any]:
    return {
        "number": number,
        "title": title,
        "body": body,
        "html_url": f"https://github.com/org/repo/pull/{number}",
        "user": {"login": author},
        "assignees": [{"login": login} for login in (assignees or [])],
    }


def review_event(sender: str, review_body: str = "", **pr: Any) -> dict[str, Any]:
    return {
        "action": "submitted",
        "pull_request": pull_request(**pr),
        "review": {"body": review_body},
        "sender": {"login": sender},
        "repository": {"full_name": "org/repo"},
    }
