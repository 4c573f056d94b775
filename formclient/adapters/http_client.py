"""Shared HTTP session for the requests-backed form transport.

This module provides a thin wrapper around ``requests.Session`` so the
transport can share timeout policy, retry behavior on connectivity failures,
and default header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``formclient.adapters.api_errors.ApiTimeoutError`` for typed transport failures.

Call context:
    - Constructed by ``RequestsTransport`` in ``formclient/adapters/transport_rest.py``.
    - Runs on the transport's worker threads, never on the caller's thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests
from requests import exceptions as req_exc

from formclient.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for transport calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for each attempt.
        retries: Number of retry attempts after the initial request.
        headers: Extra headers sent with every request.
    """
    request_timeout_s: int = 10
    retries: int = 2
    headers: Dict[str, str] = field(default_factory=dict)


class RetryingSession:
    """Requests wrapper with default headers and retry loops.

    Only timeouts and connection errors are retried; any HTTP status is
    returned to the caller, which decides how to map it.
    """

    def __init__(self, cfg: HttpConfig, api_key: Optional[str] = None) -> None:
        """Create a retry-enabled session.

        Args:
            cfg: Shared timeout and retry settings.
            api_key: Bearer token placed in ``Authorization`` headers, or ``None``.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg
        self.api_key = api_key
        self._log = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json", "X-Requested-With": "XMLHttpRequest"}
        headers.update(self.cfg.headers)
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        data: Optional[Sequence[Tuple[str, str]]] = None,
        files: Optional[List[Tuple[str, tuple]]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a request with retries on timeout/connectivity failures.

        Args:
            method: HTTP verb, upper case.
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            json_body: Optional JSON payload.
            data: Multipart text fields as ``(key, value)`` pairs.
            files: Multipart file parts as ``(key, (filename, content[, type]))``.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        context = f"{method} {url}"
        last_err: Optional[ApiError] = None
        attempts = self.cfg.retries + 1
        for attempt in range(attempts):
            if files:
                self._rewind(files)
            try:
                return self.session.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    data=data,
                    files=files,
                    headers=self._headers(),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                self._log.debug("%s attempt %d/%d timed out", context, attempt + 1, attempts)
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise last_err

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _rewind(files: List[Tuple[str, tuple]]) -> None:
        # Each retry must send the full file from the beginning.
        for _, part in files:
            handle = part[1] if len(part) >= 2 else None
            if hasattr(handle, "seek"):
                try:
                    handle.seek(0)
                except (OSError, ValueError):
                    pass


__all__ = ["HttpConfig", "RetryingSession"]
