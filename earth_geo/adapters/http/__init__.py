"""HTTP adapters - Implementations of HttpClientPort.

Available implementations:
- RequestsHttpClient: requests on a thread pool, completing Futures
"""

from .requests_client import RequestsHttpClient

__all__ = ["RequestsHttpClient"]
