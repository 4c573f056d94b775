"""REST transport implementing ``TransportPort`` on top of ``requests``.

Requests run on a small thread pool so UI callers receive a future right
away; non-2xx replies fail that future with typed adapter errors carrying the
parsed reply as ``response``.

Dependencies:
    - ``RetryingSession``/``HttpConfig`` for shared HTTP policy.
    - ``api_errors`` helpers for status-to-error conversion.
    - ``concurrent.futures.ThreadPoolExecutor`` for background dispatch.

Call context:
    - Injected into ``FormContext`` by app composition code; invoked by
      ``Form.send``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from formclient.domain.multipart import MultipartBody
from formclient.domain.ports import Response, TransportPort

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)
from .http_client import HttpConfig, RetryingSession


class RequestsTransport(TransportPort):
    """Verb-keyed HTTP dispatch returning futures."""

    def __init__(
        self,
        base_url: str = "",
        *,
        config: Optional[HttpConfig] = None,
        api_key: Optional[str] = None,
        max_workers: int = 4,
    ) -> None:
        """Create a transport.

        Args:
            base_url: Prefix joined onto relative route URLs.
            config: Timeout/retry policy; defaults to ``HttpConfig()``.
            api_key: Optional bearer token.
            max_workers: Thread-pool size for in-flight requests.
        """
        if max_workers < 1:
            raise ValueError("RequestsTransport requires at least one worker")
        self.base_url = base_url
        self.cfg = config or HttpConfig()
        self.session = RetryingSession(self.cfg, api_key=api_key)
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="formclient")
        self._log = logging.getLogger(__name__)

    # ---------- TransportPort ----------

    def get(self, url: str, body: Any) -> "Future[Response]":
        params = body.get("params") if isinstance(body, dict) else None
        if isinstance(params, MultipartBody) and params.files():
            raise ValueError(f"Cannot send file fields as query parameters: GET {url}")
        return self._submit("GET", url, params=params)

    def post(self, url: str, body: Any) -> "Future[Response]":
        return self._submit("POST", url, body=body)

    def patch(self, url: str, body: Any) -> "Future[Response]":
        return self._submit("PATCH", url, body=body)

    def put(self, url: str, body: Any) -> "Future[Response]":
        return self._submit("PUT", url, body=body)

    def close(self) -> None:
        """Stop accepting requests and release the HTTP session."""
        self._pool.shutdown(wait=True)
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _submit(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        body: Any = None,
    ) -> "Future[Response]":
        target = self._make_url(url)
        self._log.debug("Queueing %s %s", method, target)
        return self._pool.submit(self._perform, method, target, params, body)

    def _perform(self, method: str, url: str, params: Any, body: Any) -> Response:
        kwargs: Dict[str, Any] = {}
        if isinstance(params, MultipartBody):
            kwargs["params"] = params.fields()
        elif params is not None:
            kwargs["params"] = params
        if isinstance(body, MultipartBody):
            kwargs["data"] = body.fields()
            kwargs["files"] = body.files()
        elif body is not None:
            kwargs["json_body"] = body

        resp = self.session.request(method, url, **kwargs)
        ctx = f"{method} {url}"
        response = self._to_response(resp)
        self._ensure_ok(resp, response, ctx)
        return response

    def _make_url(self, url: str) -> str:
        if not self.base_url:
            return url
        return urljoin(self.base_url.rstrip("/") + "/", url.lstrip("/"))

    @staticmethod
    def _to_response(resp: requests.Response) -> Response:
        data = parse_error_payload(resp)
        return Response(
            status=resp.status_code,
            data=data,
            headers=dict(getattr(resp, "headers", {}) or {}),
        )

    @staticmethod
    def _ensure_ok(resp: requests.Response, response: Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses.

        Raises:
            ApiClientError: For HTTP 4xx responses.
            ApiServerError: For HTTP 5xx responses.
            ApiError: For all other non-2xx responses.
        """
        status = resp.status_code
        if 200 <= status < 300:
            return
        payload = response.data
        message = build_error_message(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                code=extract_error_code(payload),
                hint=extract_error_hint(payload),
                payload=payload,
                context=ctx,
                response=response,
            )
        if 500 <= status < 600:
            raise ApiServerError(
                message,
                status=status,
                payload=payload,
                context=ctx,
                response=response,
            )
        raise ApiError(message, status=status, payload=payload, context=ctx, response=response)


__all__ = ["RequestsTransport"]
