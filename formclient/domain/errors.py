"""Field-keyed error bag owned by a single form.

The bag is the only place a UI reads server-reported validation messages
from. It is replaced wholesale after each failed submission and cleared at
the start of every new attempt. Values are kept exactly as the server sent
them (a message or a list of messages); readers get lists back.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Union


def _wrap(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class FormErrors:
    """Mutable container of messages keyed by field name."""

    def __init__(self, errors: Optional[Mapping[str, Any]] = None) -> None:
        self._errors: Dict[str, Any] = {}
        if errors:
            self.set(errors)

    def all(self) -> Dict[str, Any]:
        """Return a shallow copy of the bag."""
        return dict(self._errors)

    def has(self, field: str) -> bool:
        return field in self._errors

    def any(self) -> bool:
        return bool(self._errors)

    def get(self, field: str) -> Optional[Any]:
        """Return the first message for ``field`` or ``None``."""
        messages = self.get_all(field)
        if not messages:
            return None
        return messages[0]

    def get_all(self, field: str) -> List[Any]:
        if field not in self._errors:
            return []
        return _wrap(self._errors[field])

    def only(self, *fields: str) -> List[Any]:
        """Return the first message of each listed field that has one."""
        found = []
        for name in fields:
            message = self.get(name)
            if message is not None:
                found.append(message)
        return found

    def flatten(self) -> List[Any]:
        messages: List[Any] = []
        for value in self._errors.values():
            messages.extend(_wrap(value))
        return messages

    def set(
        self,
        field: Union[str, Mapping[str, Any]],
        messages: Any = None,
    ) -> None:
        """Replace the whole bag from a mapping, or a single field's messages."""
        if isinstance(field, Mapping):
            self._errors = dict(field)
            return
        if messages is None:
            raise ValueError("FormErrors.set requires messages when given a field name.")
        self._errors[field] = messages

    def clear(self, field: Optional[str] = None) -> None:
        if field is None:
            self._errors = {}
            return
        self._errors.pop(field, None)

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return self.any()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FormErrors):
            return self._errors == other._errors
        if isinstance(other, Mapping):
            return self._errors == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FormErrors({self._errors!r})"


__all__ = ["FormErrors"]
