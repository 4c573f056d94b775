"""Shared configuration handed to every form instead of process globals."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple, Union

from .ports import FormConfigError, TransportPort
from .routes import RouteTable

DEFAULT_IGNORE: Tuple[str, ...] = ("busy", "successful", "errors", "forms")


@dataclass
class FormContext:
    """Transport, route table and reserved attribute names shared by forms."""

    transport: Optional[TransportPort] = None
    routes: RouteTable = field(default_factory=RouteTable)
    ignore: Tuple[str, ...] = DEFAULT_IGNORE

    def __post_init__(self) -> None:
        if isinstance(self.routes, Mapping):
            self.routes = RouteTable.from_mapping(self.routes)
        self.ignore = tuple(self.ignore)
        missing = [name for name in ("busy", "successful", "errors") if name not in self.ignore]
        if missing:
            raise ValueError(f"Reserved names must include: {', '.join(missing)}")

    @classmethod
    def create(
        cls,
        transport: Optional[TransportPort] = None,
        routes: Union[RouteTable, Mapping[str, str], None] = None,
    ) -> "FormContext":
        if routes is None:
            routes = RouteTable()
        elif not isinstance(routes, RouteTable):
            routes = RouteTable.from_mapping(routes)
        return cls(transport=transport, routes=routes)

    def require_transport(self) -> TransportPort:
        if self.transport is None:
            raise FormConfigError("No transport configured for this form context.")
        return self.transport

    def with_transport(self, transport: TransportPort) -> "FormContext":
        return replace(self, transport=transport)


__all__ = ["DEFAULT_IGNORE", "FormContext"]
