from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

import pytest

from bitaxecli import cli
from bitaxecli.api import Client


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body if body is not None else {})

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records calls and replays one response."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Tuple[str, str, float]] = []

    def request(self, method: str, url: str, timeout: float = 0.0, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_device(monkeypatch):
    """Route every CLI-built Client through a FakeSession."""
    session = FakeSession()

    def _client(args):
        return Client(base_url=args.url, timeout=args.timeout, session=session)

    monkeypatch.setattr(cli, "_client", _client)
    return session


@pytest.fixture
def no_env(monkeypatch):
    monkeypatch.delenv("BITAXE_URL", raising=False)
