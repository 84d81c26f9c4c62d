"""Shared test fixtures: a fake requests session and log capture."""
import io
import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.logging_config import setup_logging


_INVALID_JSON = object()


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop handlers that setup_logging() attached during a test."""
    yield
    for name in ("weather", "core", "observer"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = "" if payload is None or payload is _INVALID_JSON else json.dumps(payload)
        self.text = text

    def json(self):
        if self._payload is _INVALID_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """
    Routes GET calls by URL substring and records every call.

    routes: list of (url_fragment, FakeResponse | Exception). The first
    fragment contained in the requested URL wins.
    """

    def __init__(self, routes):
        self.routes = list(routes)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({
            "url": url,
            "params": params,
            "headers": headers,
            "timeout": timeout,
        })
        for fragment, result in self.routes:
            if fragment in url:
                if isinstance(result, Exception):
                    raise result
                return result
        return FakeResponse(404, text=f"no route for {url}")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def urls(self):
        return [call["url"] for call in self.calls]


@pytest.fixture
def make_response():
    """Factory: make_response(status, payload=None, text=None, invalid_json=False)."""
    def _make(status_code=200, payload=None, text=None, invalid_json=False):
        if invalid_json:
            return FakeResponse(status_code, _INVALID_JSON, text=text or "<html>oops</html>")
        return FakeResponse(status_code, payload, text=text)
    return _make


@pytest.fixture
def fake_session():
    """Factory: fake_session([(fragment, response), ...])."""
    return FakeSession


class LogCapture:
    """JSON log lines written by a logger configured with setup_logging()."""

    def __init__(self, name):
        self.stream = io.StringIO()
        self.logger = setup_logging(level="DEBUG", stream=self.stream, name=name)

    @property
    def records(self):
        lines = self.stream.getvalue().splitlines()
        return [json.loads(line) for line in lines if line.strip()]

    def by_level(self, level):
        return [r for r in self.records if r["level"] == level]


@pytest.fixture
def log_capture(request):
    return LogCapture(f"weather.test.{request.node.name}")
