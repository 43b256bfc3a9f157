"""Test doubles for the HTTP port and the clock, plus canned responses."""

from __future__ import annotations

import json
from concurrent.futures import Future
from typing import Callable, List, Optional, Tuple

from earth_geo.domain.models import HttpRequest, HttpResult

BERLIN_IP_RESPONSE = json.dumps(
    {
        "status": "success",
        "country": "Germany",
        "regionName": "Land Berlin",
        "city": "Berlin",
        "lat": 52.52,
        "lon": 13.405,
        "timezone": "Europe/Berlin",
        "isp": "Example Telecom",
        "query": "8.8.8.8",
    }
)

BERLIN_GEOCODE_RESPONSE = json.dumps(
    [
        {
            "place_id": 123,
            "lat": "52.5170365",
            "lon": "13.3888599",
            "display_name": "Berlin, Deutschland",
            "type": "city",
        }
    ]
)

IP_API_FAILURE_RESPONSE = json.dumps(
    {"status": "fail", "message": "reserved range", "query": "8.8.8.8"}
)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHttpClient:
    """HttpClientPort double.

    With a handler, every request completes immediately with the
    handler's result. Without one, requests stay pending until
    complete_next() is called.
    """

    def __init__(
        self, handler: Optional[Callable[[HttpRequest], HttpResult]] = None
    ) -> None:
        self.handler = handler
        self.requests: List[HttpRequest] = []
        self._pending: List[Tuple[HttpRequest, Future[HttpResult]]] = []

    def fetch(
        self,
        request: HttpRequest,
        callback: Optional[Callable[[HttpResult], None]] = None,
    ) -> Future[HttpResult]:
        self.requests.append(request)
        future: Future[HttpResult] = Future()
        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))
        if self.handler is not None:
            future.set_result(self.handler(request))
        else:
            self._pending.append((request, future))
        return future

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def complete_next(self, result: HttpResult) -> HttpRequest:
        request, future = self._pending.pop(0)
        future.set_result(result)
        return request


def ok(body: str) -> Callable[[HttpRequest], HttpResult]:
    return lambda request: HttpResult(succeeded=True, data=body, status_code=200)


def failing(error: str) -> Callable[[HttpRequest], HttpResult]:
    return lambda request: HttpResult(succeeded=False, error=error)
