from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pytest_socket import disable_socket, enable_socket

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from qparas.api_clients.paras_client import Page  # noqa: E402
from qparas.query import RequestDescriptor  # noqa: E402


@pytest.fixture(autouse=True)
def _disable_network():
    """Block real sockets; HTTP is served by ``requests_mock``."""

    disable_socket()
    try:
        yield
    finally:
        enable_socket()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PARAS_URL", "QPARAS_USER_AGENT", "QPARAS_TIMEOUT", "QPARAS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class FakeFetch:
    """Serve a scripted sequence of pages and record every request."""

    def __init__(self, pages):
        self._pages = list(pages)
        self.requests: list[RequestDescriptor] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: RequestDescriptor) -> Page:
        self.requests.append(request)
        item = self._pages[len(self.requests) - 1]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_fetch():
    return FakeFetch
