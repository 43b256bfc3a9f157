"""HTTP port - Abstraction over the host's asynchronous HTTP client.

Only GET is needed: no custom headers or bodies. The request is issued
without blocking the caller and completes later on whatever thread the
implementation uses.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import HttpRequest, HttpResult


class HttpClientPort(Protocol):
    """Port for asynchronous HTTP GET requests.

    Implementation: adapters/http/requests_client.py

    The returned future always completes with an HttpResult; transport
    errors and timeouts are reported through ``succeeded=False`` rather
    than as exceptions.
    """

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
        ...
