"""Named route table and URL template resolution."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional
from urllib.parse import unquote


class RouteTable:
    """Mapping of symbolic route names to URL templates with ``{param}`` slots."""

    def __init__(self, routes: Optional[Mapping[str, str]] = None) -> None:
        self._routes: Dict[str, str] = {}
        for name, template in (routes or {}).items():
            self.register(name, template)

    @classmethod
    def from_mapping(cls, routes: Mapping[str, str]) -> "RouteTable":
        if not isinstance(routes, Mapping):
            raise ValueError("Route table must be a mapping of name -> URL template.")
        return cls(routes)

    def register(self, name: str, template: str) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Route name must be a non-empty string.")
        if not isinstance(template, str):
            raise ValueError(f"Route {name!r} template must be a string.")
        self._routes[name] = template

    def template(self, name: str) -> Optional[str]:
        """Return the decoded template for ``name``, or ``None`` when unknown."""
        raw = self._routes.get(name)
        if raw is None:
            return None
        return unquote(raw)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)


def resolve_route(routes: RouteTable, name: str, parameters: Any = None) -> str:
    """Resolve ``name`` to a concrete URL.

    Unknown names are treated as literal URLs. A non-mapping ``parameters``
    is shorthand for ``{"id": parameters}``. Each parameter fills the first
    matching ``{key}`` placeholder; leftovers on either side are kept or
    ignored.
    """
    url = routes.template(name)
    if url is None:
        url = name

    if parameters is None:
        parameters = {}
    elif not isinstance(parameters, Mapping):
        parameters = {"id": parameters}

    for key, value in parameters.items():
        url = url.replace("{%s}" % key, str(value), 1)

    return url


__all__ = ["RouteTable", "resolve_route"]
