from __future__ import annotations

from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Union

from formclient.domain.ports import Response, TransportPort

Reply = Union[Response, BaseException]


@dataclass
class TransportMock(TransportPort):
    """Offline substitute for ``RequestsTransport`` with deterministic replies.

    Replies queued with ``reply``/``fail`` are consumed in order; once the
    queue is empty every call succeeds with ``Response(200, {})``. Futures
    are settled before being returned, so form callbacks run inline.
    Set ``defer`` to keep futures pending until ``resolve_pending`` is called.
    """

    defer: bool = False
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._replies: Deque[Reply] = deque()
        self._pending: Deque[Future] = deque()

    # ---------- scripting ----------

    def reply(self, data: Any = None, status: int = 200) -> "TransportMock":
        self._replies.append(Response(status=status, data=data))
        return self

    def fail(self, error: BaseException) -> "TransportMock":
        self._replies.append(error)
        return self

    def resolve_pending(self) -> int:
        """Settle every deferred future in call order; return how many."""
        count = 0
        while self._pending:
            self._settle(self._pending.popleft())
            count += 1
        return count

    @property
    def last_call(self) -> Dict[str, Any]:
        if not self.calls:
            raise AssertionError("TransportMock received no calls")
        return self.calls[-1]

    # ---------- TransportPort ----------

    def get(self, url: str, body: Any) -> "Future[Response]":
        return self._record("get", url, body)

    def post(self, url: str, body: Any) -> "Future[Response]":
        return self._record("post", url, body)

    def patch(self, url: str, body: Any) -> "Future[Response]":
        return self._record("patch", url, body)

    def put(self, url: str, body: Any) -> "Future[Response]":
        return self._record("put", url, body)

    # ---------- internals ----------

    def _record(self, method: str, url: str, body: Any) -> "Future[Response]":
        self.calls.append({"method": method, "url": url, "body": body})
        fut: "Future[Response]" = Future()
        if self.defer:
            self._pending.append(fut)
        else:
            self._settle(fut)
        return fut

    def _settle(self, fut: Future) -> None:
        if not fut.set_running_or_notify_cancel():
            return
        reply: Reply = self._replies.popleft() if self._replies else Response(200, {})
        if isinstance(reply, BaseException):
            fut.set_exception(reply)
        else:
            fut.set_result(reply)


__all__ = ["TransportMock"]
