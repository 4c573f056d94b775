from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pytest
from requests import exceptions as req_exc

from formclient.adapters.api_errors import ApiClientError, ApiServerError, ApiTimeoutError
from formclient.adapters.http_client import HttpConfig
from formclient.adapters.transport_rest import RequestsTransport
from formclient.domain.context import FormContext
from formclient.domain.fields import FileBlob, FileList
from formclient.domain.form import Form
from formclient.domain.multipart import to_form_data


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = "" if payload is None else str(payload)
        self.headers = {"Content-Type": "application/json"}

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class _SessionStub:
    def __init__(self, responses: Sequence[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> _ResponseStub:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise RuntimeError("No stub response configured")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def _transport(responses: Sequence[Any], *, base_url: str = "http://api.local", retries: int = 2) -> tuple:
    transport = RequestsTransport(base_url, config=HttpConfig(request_timeout_s=3, retries=retries), max_workers=1)
    stub = _SessionStub(responses)
    transport.session.session = stub  # type: ignore[assignment]
    return transport, stub


def test_post_sends_json_and_returns_response() -> None:
    transport, stub = _transport([_ResponseStub({"id": 1}, status_code=201)])

    response = transport.post("/users", {"name": "Ada"}).result(timeout=5)

    assert response.status == 201
    assert response.data == {"id": 1}
    call = stub.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://api.local/users"
    assert call["json"] == {"name": "Ada"}
    assert call["files"] is None
    assert call["timeout"] == 3
    assert call["headers"]["Accept"] == "application/json"
    transport.close()


def test_get_sends_params_as_query() -> None:
    transport, stub = _transport([_ResponseStub([])])

    transport.get("/search", {"params": {"q": "forms"}}).result(timeout=5)

    assert stub.calls[0]["params"] == {"q": "forms"}
    assert stub.calls[0]["json"] is None
    transport.close()


def test_multipart_body_is_split_into_data_and_files() -> None:
    transport, stub = _transport([_ResponseStub({}, status_code=200)])
    body = to_form_data(
        {"title": "Batch", "docs": FileList.of(FileBlob("1.pdf", b"1"), FileBlob("2.pdf", b"2"))}
    )

    transport.put("/upload", body).result(timeout=5)

    call = stub.calls[0]
    assert call["data"] == [("title", "Batch")]
    assert call["files"] == [("docs[]", ("1.pdf", b"1")), ("docs[]", ("2.pdf", b"2"))]
    assert call["json"] is None
    transport.close()


def test_client_error_carries_parsed_response() -> None:
    payload = {"message": "Invalid", "errors": {"email": ["taken"]}}
    transport, _ = _transport([_ResponseStub(payload, status_code=422)])

    with pytest.raises(ApiClientError) as info:
        transport.patch("/users/1", {"email": "x"}).result(timeout=5)

    err = info.value
    assert err.status == 422
    assert err.response.data == payload
    assert err.hint == "email: taken"
    assert "HTTP 422" in str(err)
    transport.close()


def test_server_error_is_typed() -> None:
    transport, _ = _transport([_ResponseStub({"message": "Down"}, status_code=503)])

    with pytest.raises(ApiServerError) as info:
        transport.post("/users", {}).result(timeout=5)

    assert info.value.response.status == 503
    transport.close()


def test_connection_errors_are_retried_then_raised_as_timeout() -> None:
    transport, stub = _transport(
        [req_exc.ConnectionError("down"), req_exc.Timeout("slow"), req_exc.ConnectionError("down")],
        retries=2,
    )

    with pytest.raises(ApiTimeoutError):
        transport.post("/users", {}).result(timeout=5)

    assert len(stub.calls) == 3
    transport.close()


def test_retry_recovers_after_transient_failure() -> None:
    transport, stub = _transport([req_exc.Timeout("slow"), _ResponseStub({"ok": True})])

    response = transport.post("/users", {}).result(timeout=5)

    assert response.data == {"ok": True}
    assert len(stub.calls) == 2
    transport.close()


def test_empty_body_parses_to_none() -> None:
    transport, _ = _transport([_ResponseStub(None, status_code=204)])

    response = transport.put("/users/1", {}).result(timeout=5)

    assert response.status == 204
    assert response.data is None
    transport.close()


def test_absolute_url_ignores_base() -> None:
    transport, stub = _transport([_ResponseStub({})])

    transport.post("https://other.example/hook", {}).result(timeout=5)

    assert stub.calls[0]["url"] == "https://other.example/hook"
    transport.close()


def test_form_failure_through_rest_transport_fills_errors() -> None:
    transport, _ = _transport(
        [_ResponseStub({"message": "Invalid", "errors": {"email": ["taken"]}}, status_code=422)]
    )
    form = Form(
        {"email": "ada@example.com"},
        context=FormContext.create(transport, {"users.store": "/users"}),
    )

    result = form.post("users.store")

    with pytest.raises(ApiClientError):
        result.result(timeout=5)
    assert form.busy is False
    assert form.errors.get("email") == "taken"
    transport.close()


def test_close_releases_session() -> None:
    transport, stub = _transport([])

    with transport:
        pass

    assert stub.closed is True


def test_requires_a_worker() -> None:
    with pytest.raises(ValueError):
        RequestsTransport(max_workers=0)


def test_get_with_file_params_is_rejected() -> None:
    transport, stub = _transport([])
    params = to_form_data({"q": "x", "avatar": FileBlob("a.png", b"x")})

    with pytest.raises(ValueError):
        transport.get("/search", {"params": params})

    assert stub.calls == []
    transport.close()


def test_form_get_with_file_fields_fails_without_sending() -> None:
    transport, stub = _transport([])
    form = Form(
        {"q": "x", "avatar": FileBlob("a.png", b"x")},
        context=FormContext.create(transport),
    )

    result = form.get("/search")

    assert isinstance(result.exception(timeout=5), ValueError)
    assert form.busy is False
    assert stub.calls == []
    transport.close()
