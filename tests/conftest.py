import json
from typing import List, Optional

import pytest

from rulerun.core.cancellation import CancellationToken
from rulerun.protocol.models import HttpResponse
from rulerun.transport.base import Gateway


class FakeGateway(Gateway):
    """Replays queued responses (or exceptions) and records every request."""

    def __init__(self, *responses):
        self.queue: List = list(responses)
        self.requests: List[dict] = []

    def enqueue(self, status_code: int, body) -> None:
        if not isinstance(body, str):
            body = json.dumps(body)
        self.queue.append(HttpResponse(status_code=status_code, body=body))

    def enqueue_error(self, exc: Exception) -> None:
        self.queue.append(exc)

    def send(self, method, url, headers, body=None, timeout=30.0):
        self.requests.append(
            {"method": method, "url": url, "headers": dict(headers), "body": body, "timeout": timeout}
        )
        if not self.queue:
            raise AssertionError(f"unexpected request {method} {url}")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InstantToken(CancellationToken):
    """Waits by advancing a fake clock instead of sleeping."""

    def __init__(self, clock: FakeClock, cancel_after: Optional[int] = None) -> None:
        super().__init__()
        self.clock = clock
        self.waits: List[float] = []
        self._cancel_after = cancel_after

    def wait(self, seconds: float) -> bool:
        self.waits.append(seconds)
        if self._cancel_after is not None and len(self.waits) > self._cancel_after:
            self.cancel()
            return True
        self.clock.advance(seconds)
        return self.cancelled


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token(clock):
    return InstantToken(clock)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    from rulerun.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_token(clock):
    def factory(cancel_after: Optional[int] = None) -> InstantToken:
        return InstantToken(clock, cancel_after=cancel_after)

    return factory
