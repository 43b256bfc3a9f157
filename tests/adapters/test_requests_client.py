"""Tests for the requests-backed HTTP client."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from earth_geo.adapters.http import RequestsHttpClient
from earth_geo.domain.models import HttpRequest


@pytest.fixture
def client():
    client = RequestsHttpClient(user_agent="earth-geo-tests", max_workers=2)
    yield client
    client.close()


def _response(status_code=200, text="{}"):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.text = text
    return response


def test_user_agent_is_set(client):
    assert client._session.headers["User-Agent"] == "earth-geo-tests"


def test_successful_get(client, monkeypatch):
    get = MagicMock(return_value=_response(200, '{"lat": 1}'))
    monkeypatch.setattr(client._session, "get", get)

    result = client.fetch(HttpRequest("http://geo/x", timeout_seconds=3.0)).result(5)

    assert result.succeeded
    assert result.data == '{"lat": 1}'
    assert result.status_code == 200
    get.assert_called_once_with("http://geo/x", timeout=3.0)


def test_http_error_status(client, monkeypatch):
    monkeypatch.setattr(
        client._session, "get", MagicMock(return_value=_response(404, "nope"))
    )

    result = client.fetch(HttpRequest("http://geo/x")).result(5)

    assert not result.succeeded
    assert result.error == "HTTP 404"
    assert result.status_code == 404


def test_timeout(client, monkeypatch):
    monkeypatch.setattr(
        client._session, "get", MagicMock(side_effect=requests.Timeout("slow"))
    )

    result = client.fetch(HttpRequest("http://geo/x")).result(5)

    assert not result.succeeded
    assert result.error == "request timed out"


def test_connection_error(client, monkeypatch):
    monkeypatch.setattr(
        client._session,
        "get",
        MagicMock(side_effect=requests.ConnectionError("connection refused")),
    )

    result = client.fetch(HttpRequest("http://geo/x")).result(5)

    assert not result.succeeded
    assert "connection refused" in result.error


def test_callback_runs_with_result(client, monkeypatch):
    monkeypatch.setattr(client._session, "get", MagicMock(return_value=_response()))
    seen = []
    done = threading.Event()

    def callback(result):
        seen.append(result)
        done.set()

    client.fetch(HttpRequest("http://geo/x"), callback=callback)

    assert done.wait(5)
    assert seen[0].succeeded


def test_close_rejects_new_requests():
    client = RequestsHttpClient()
    client.close()

    with pytest.raises(RuntimeError):
        client.fetch(HttpRequest("http://geo/x"))


def test_worker_pool_is_ready_after_construction():
    client = RequestsHttpClient(max_workers=3)
    try:
        assert isinstance(client._executor, ThreadPoolExecutor)
        assert client._executor._max_workers == 3
    finally:
        client.close()
