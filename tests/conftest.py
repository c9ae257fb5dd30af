"""Shared fixtures: settings without pauses and a scriptable fake remote API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

CREDENTIAL = (
    "_|WARNING:-DO-NOT-SHARE-THIS.--Sharing-this-will-allow-someone-to-log-in-as-you-and-to-steal-your-ROBUX-and-items.|_"
    + "C0FFEE42" * 12
)

LOGOUT_URL = "https://auth.roblox.com/v2/logout"
LOGIN_URL = "https://auth.roblox.com/v2/login"
PRIMARY_GROUP_URL = "https://groups.roblox.com/v1/user/groups/primary"


def change_owner_url(group_id: int) -> str:
    return f"https://groups.roblox.com/v1/groups/{group_id}/change-owner"


@dataclass
class _Reply:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    text: str | None = None
    raises: Callable[[httpx.Request], Exception] | None = None

    def build(self, request: httpx.Request) -> httpx.Response:
        if self.raises is not None:
            raise self.raises(request)
        if self.json is not None:
            return httpx.Response(self.status, headers=self.headers, json=self.json)
        return httpx.Response(self.status, headers=self.headers, text=self.text or "")


class FakeRemote:
    """Scripted replies per URL; the last reply for a URL repeats."""

    def __init__(self) -> None:
        self._replies: dict[str, list[_Reply]] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, url: str, status: int, **kwargs: Any) -> "FakeRemote":
        self._replies.setdefault(url, []).append(_Reply(status=status, **kwargs))
        return self

    def fail(self, url: str, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> "FakeRemote":
        return self.reply(url, 0, raises=lambda request: exc_type("boom", request=request))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        queue = self._replies.get(url)
        if not queue:
            raise AssertionError(f"unexpected request to {url}")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        return reply.build(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls_to(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(token_retry_pause_seconds=0, http_timeout_seconds=5)


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def silent_logger() -> logging.Logger:
    logger = logging.getLogger("tests.silent")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
