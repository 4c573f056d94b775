"""Submittable form entity.

A ``Form`` holds arbitrary user fields next to a few reserved bookkeeping
attributes (``busy``, ``successful``, ``errors`` and optionally ``forms``)
and sends its fields to a named route through the context's transport.

Fields live in an ordered mapping kept apart from the reserved attributes,
so enumeration never has to filter object internals. Both attribute access
(``form.email``) and item access (``form["email"]``) reach that mapping;
item access is the way to reach fields whose names collide with methods.

Call context:
    - Constructed by view models with initial values and a ``FormContext``.
    - ``get``/``post``/``patch``/``put`` are invoked from UI handlers; the
      returned future settles once the transport answers.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, InvalidStateError
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..usecases.error_mapping import extract_errors
from .context import FormContext
from .errors import FormErrors
from .multipart import MultipartBody, has_file, to_form_data
from .ports import HTTP_METHODS, Response
from .routes import resolve_route


class Form:
    """Field values, submission flags and error bag for one form."""

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        merge_data: Optional[Mapping[str, Any]] = None,
        *,
        context: Optional[FormContext] = None,
    ) -> None:
        """Create a form from initial values.

        Args:
            data: Initial field values.
            merge_data: Values merged over ``data``; wins on key collision.
            context: Shared transport/route configuration. Defaults to an
                empty context, which can build and reset forms but not send.
        """
        object.__setattr__(self, "_context", context or FormContext())
        object.__setattr__(self, "_fields", {})
        object.__setattr__(self, "_log", logging.getLogger(__name__))

        initial: Dict[str, Any] = dict(data or {})
        initial.update(merge_data or {})
        self.set(initial)

        self.busy = False
        self.successful = False
        self.errors = FormErrors()

    # ------------------------------------------------------------------
    # Attribute routing
    # ------------------------------------------------------------------
    def _is_reserved(self, name: str) -> bool:
        # Internals (_context, _fields, _log) are written once in __init__ and
        # never routed here, so underscore names like _token stay fields.
        return name in self._context.ignore

    def __setattr__(self, name: str, value: Any) -> None:
        if self._is_reserved(name):
            object.__setattr__(self, name, value)
        else:
            self._fields[name] = value

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        fields = self.__dict__.get("_fields", {})
        try:
            return fields[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!s} has no field {name!r}"
            ) from None

    def __delattr__(self, name: str) -> None:
        if self._is_reserved(name):
            object.__delattr__(self, name)
            return
        try:
            del self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> Any:
        if self._is_reserved(name):
            try:
                return object.__getattribute__(self, name)
            except AttributeError:
                raise KeyError(name) from None
        return self._fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fields))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(fields={self._fields!r}, busy={self.busy!r}, "
            f"successful={self.successful!r}, errors={self.errors!r})"
        )

    @property
    def context(self) -> FormContext:
        return self._context

    def keys(self) -> List[str]:
        return list(self._fields)

    # ------------------------------------------------------------------
    # Field management
    # ------------------------------------------------------------------
    def set(self, data: Mapping[str, Any]) -> None:
        """Overwrite (or add) every key of ``data`` on the form."""
        for key, value in data.items():
            setattr(self, key, value)

    def get_data(self) -> Dict[str, Any]:
        """Return a fresh mapping of every non-reserved field."""
        return dict(self._fields)

    def reset(self) -> None:
        """Blank every field; flags and errors stay as they are."""
        for key in self._fields:
            self._fields[key] = ""

    def clear(self) -> None:
        self.errors.clear()
        self.successful = False

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def start_processing(self) -> None:
        self.errors.clear()
        self.busy = True
        self.successful = False

    def finish_processing(self) -> None:
        self.busy = False
        self.successful = True

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def get(self, route_name: str) -> "Future[Response]":
        return self.send("get", route_name)

    def post(self, route_name: str) -> "Future[Response]":
        return self.send("post", route_name)

    def patch(self, route_name: str) -> "Future[Response]":
        return self.send("patch", route_name)

    def put(self, route_name: str) -> "Future[Response]":
        return self.send("put", route_name)

    def send(self, method: str, route_name: str) -> "Future[Response]":
        """Send the form data via an HTTP request.

        Args:
            method: One of ``get``, ``post``, ``patch``, ``put``.
            route_name: Route table name, or a literal URL.

        Returns:
            Future resolved with the transport ``Response``, or failed with the
            transport's exception after the error bag has been filled.

        Raises:
            ValueError: If ``method`` is not a supported verb.
            FormConfigError: If the context has no transport.
        """
        verb = str(method).lower()
        if verb not in HTTP_METHODS:
            raise ValueError(f"Unsupported form method: {method!r}")
        transport = self._context.require_transport()

        self.start_processing()

        body: Any = self.get_data()
        if self.has_file(body):
            body = self.to_form_data(body)
        if verb == "get":
            body = {"params": body}

        url = self.route(route_name)
        self._log.debug("Submitting form: %s %s", verb.upper(), url)

        result: "Future[Response]" = Future()
        try:
            dispatched = getattr(transport, verb)(url, body)
        except Exception as exc:
            self._fail(result, exc)
            return result
        if not isinstance(dispatched, Future):
            self._fail(
                result,
                TypeError(
                    f"Transport {verb}() returned {type(dispatched).__name__}, expected a Future"
                ),
            )
            return result

        def _propagate_cancel(fut: Future) -> None:
            if fut.cancelled():
                dispatched.cancel()

        result.add_done_callback(_propagate_cancel)
        dispatched.add_done_callback(lambda fut: self._settle(result, fut))
        return result

    def _settle(self, result: Future, dispatched: Future) -> None:
        if result.cancelled():
            self._log.debug("Form result abandoned; ignoring transport completion")
            return
        if dispatched.cancelled():
            result.cancel()
            return
        exc = dispatched.exception()
        if exc is not None:
            self._fail(result, exc)
            return
        self.finish_processing()
        try:
            result.set_result(dispatched.result())
        except InvalidStateError:
            self._log.debug("Form result already settled")

    def _fail(self, result: Future, exc: BaseException) -> None:
        self.busy = False
        self.errors.set(self.extract_errors(exc))
        self._log.warning("Form submission failed: %s", exc)
        try:
            result.set_exception(exc)
        except InvalidStateError:
            self._log.debug("Form result already settled")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def extract_errors(self, payload: Any) -> Dict[str, Any]:
        return extract_errors(payload)

    def has_file(self, data: Mapping[str, Any]) -> bool:
        return has_file(data)

    def to_form_data(self, data: Mapping[str, Any]) -> MultipartBody:
        return to_form_data(data)

    def route(self, name: str, parameters: Any = None) -> str:
        """Resolve a named route, substituting ``{key}`` placeholders."""
        return resolve_route(self._context.routes, name, parameters)


__all__ = ["Form"]
