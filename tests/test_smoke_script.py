"""Smoke script run against an in-process app instead of a live server."""

import sys

from fastapi.testclient import TestClient

from api import create_app
from core.exit_policy import RuntimeState
from scripts import smoke_test


def test_smoke_script_passes_against_app(registry, monkeypatch, capsys) -> None:
    client = TestClient(create_app(registry=registry, state=RuntimeState()))

    def _request(method, url, timeout=None):
        return client.request(method, url.replace("http://127.0.0.1:8000", ""))

    monkeypatch.setattr(smoke_test.requests, "request", _request)
    monkeypatch.setattr(sys, "argv", ["smoke_test.py", "--query", "module=foo&module=nope", "--runs", "2"])

    assert smoke_test.main() == 0

    out = capsys.readouterr().out
    assert "[FAIL]" not in out
    assert "modules_ran=2" in out
