from typing import Callable, List

import httpx
import pytest

from core.config import Settings

BASE_URL = "https://api.example.com"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def settings() -> Settings:
    return Settings(base_api_url=BASE_URL)


@pytest.fixture
def settings_with_key() -> Settings:
    return Settings(base_api_url=BASE_URL, api_key="secret-key")


@pytest.fixture
def make_transport():
    def _make(status: int = 200, text: str = "") -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status, text=text))

    return _make
