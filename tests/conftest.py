"""Pytest configuration and fixtures."""

import io
import json
import tarfile
import time
from pathlib import Path

import pytest
import requests


class FakeResponse:
    """Stand-in for requests.Response with just what the launcher touches."""

    def __init__(self, status_code: int = 200, json_data=None, content: bytes = b"", text=None):
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.text = text if text is not None else (json.dumps(json_data) if json_data is not None else "")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._json is None:
            return json.loads(self.text)
        return self._json

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """
    Records requests and answers them from per-URL handlers.

    A handler is a FakeResponse, an exception instance to raise, or a list
    consumed one item per call.
    """

    def __init__(self):
        self.get_handlers: dict[str, object] = {}
        self.post_handlers: dict[str, object] = {}
        self.calls: list[tuple[str, str, dict]] = []

    def _answer(self, handlers, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        if url not in handlers:
            raise requests.ConnectionError(f"no route to {url}")
        handler = handlers[url]
        if isinstance(handler, list):
            handler = handler.pop(0) if len(handler) > 1 else handler[0]
        if isinstance(handler, Exception):
            raise handler
        return handler

    def get(self, url, **kwargs):
        return self._answer(self.get_handlers, "GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._answer(self.post_handlers, "POST", url, kwargs)

    def count(self, method: str, url: str | None = None) -> int:
        return sum(1 for m, u, _ in self.calls if m == method and (url is None or u == url))


def eventually(predicate, message: str = "condition never held", timeout: float = 10, step=0.05):
    """Poll `predicate` until it is truthy; fail the test after `timeout` seconds."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(step)
    pytest.fail(message)


def make_tarball(path: Path, members: dict[str, bytes]) -> bytes:
    """Write a .tar.gz holding ``members`` and return its bytes."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(data))
    content = buf.getvalue()
    path.write_bytes(content)
    return content


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Keep PATH and runner variables from leaking between tests."""
    monkeypatch.setenv("PATH", "/usr/bin")
    monkeypatch.delenv("GITHUB_PATH", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.setenv("RUNNER_TOOL_CACHE", str(tmp_path / "toolcache"))
    monkeypatch.setenv("RUNNER_TEMP", str(tmp_path))
    return tmp_path

