from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Dict, Protocol

HttpMethod = str
HTTP_METHODS: tuple[HttpMethod, ...] = ("get", "post", "patch", "put")


# ---- Error model ----
class FormConfigError(RuntimeError):
    """Raised when a form is used without the collaborators it needs."""


# ---- Response shape ----
@dataclass
class Response:
    """Normalized transport response; consumers read ``data``."""

    status: int = 200
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


# ---- Ports (Hexagonal boundaries) ----
class TransportPort(Protocol):
    """Verb-keyed HTTP dispatch used by forms.

    Each call returns a future resolved with a ``Response`` on success, or
    failed with an exception. Exceptions that wrap a server reply expose it
    as ``.response`` so the form can read ``.response.data``.
    GET receives ``{"params": ...}`` which must be sent as a query string.
    """

    def get(self, url: str, body: Any) -> "Future[Response]": ...
    def post(self, url: str, body: Any) -> "Future[Response]": ...
    def patch(self, url: str, body: Any) -> "Future[Response]": ...
    def put(self, url: str, body: Any) -> "Future[Response]": ...


__all__ = ["FormConfigError", "HTTP_METHODS", "HttpMethod", "Response", "TransportPort"]
