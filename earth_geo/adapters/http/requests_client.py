"""Asynchronous HTTP client built on requests and a thread pool.

Each fetch is submitted to a small executor and returns a Future
immediately. Results are delivered on the worker thread, so callbacks
must not assume they run on the caller's thread or in request order.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional

import requests

from ...domain.models import HttpRequest, HttpResult


@dataclass
class RequestsHttpClient:
    """HTTP GET client implementing HttpClientPort.

    Timeouts are enforced by requests; a timed-out or failed request
    completes with ``succeeded=False`` instead of raising.

    Attributes:
        user_agent: Sent with every request (Nominatim requires one)
        max_workers: Size of the worker pool
    """

    user_agent: str = "earth-geo"
    max_workers: int = 4

    _session: requests.Session = field(default_factory=requests.Session, repr=False)
    _executor: ThreadPoolExecutor = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._session.headers["User-Agent"] = self.user_agent
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="earth-geo-http",
        )

    def fetch(
        self,
        request: HttpRequest,
        callback: Optional[Callable[[HttpResult], None]] = None,
    ) -> Future[HttpResult]:
        """Issue a GET request without blocking.

        Args:
            request: URL and timeout.
            callback: Optional function invoked with the result on completion.

        Returns:
            A future completed with the HttpResult.
        """
        future = self._executor.submit(self._get, request)
        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))
        return future

    def _get(self, request: HttpRequest) -> HttpResult:
        try:
            response = self._session.get(request.url, timeout=request.timeout_seconds)
        except requests.Timeout:
            self._logger.warning(
                "HTTP request timed out",
                extra={"url": request.url, "timeout": request.timeout_seconds},
            )
            return HttpResult(succeeded=False, error="request timed out")
        except requests.RequestException as e:
            self._logger.warning(
                "HTTP request failed",
                extra={"url": request.url, "error": str(e)},
            )
            return HttpResult(succeeded=False, error=str(e))

        if not response.ok:
            return HttpResult(
                succeeded=False,
                data=response.text,
                error=f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return HttpResult(
            succeeded=True,
            data=response.text,
            status_code=response.status_code,
        )

    def close(self) -> None:
        """Stop accepting requests and release the session."""
        self._executor.shutdown(wait=False)
        self._session.close()
