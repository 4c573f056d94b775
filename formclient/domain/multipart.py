"""Multipart body construction for forms that carry files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Tuple

from .fields import FileBlob, FileList, is_file_value

MultipartEntry = Tuple[str, Any]


def _form_value(value: Any) -> str:
    # Mirrors how browser form data stringifies scalars.
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


@dataclass
class MultipartBody:
    """Ordered multipart entries; keys may repeat."""

    entries: List[MultipartEntry] = field(default_factory=list)

    def append(self, key: str, value: Any) -> None:
        if isinstance(value, FileBlob):
            self.entries.append((key, value))
        else:
            self.entries.append((key, _form_value(value)))

    def get_all(self, key: str) -> List[Any]:
        return [value for name, value in self.entries if name == key]

    def keys(self) -> List[str]:
        return [name for name, _ in self.entries]

    def fields(self) -> List[Tuple[str, str]]:
        """Return the non-file entries as ``(key, text)`` pairs."""
        return [(name, value) for name, value in self.entries if not isinstance(value, FileBlob)]

    def files(self) -> List[Tuple[str, tuple]]:
        """Return the file entries in the list-of-tuples form requests expects."""
        return [
            (name, value.as_part())
            for name, value in self.entries
            if isinstance(value, FileBlob)
        ]

    def __iter__(self) -> Iterator[MultipartEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def has_file(data: Mapping[str, Any]) -> bool:
    """Return True when any value is a file or a file list."""
    return any(is_file_value(value) for value in data.values())


def to_form_data(data: Mapping[str, Any]) -> MultipartBody:
    """Encode a field mapping as multipart entries.

    ``FileList`` values expand to one ``key[]`` entry per file in order.
    """
    body = MultipartBody()
    for key, value in data.items():
        if isinstance(value, FileList):
            for blob in value:
                body.append(f"{key}[]", blob)
        else:
            body.append(key, value)
    return body


__all__ = ["MultipartBody", "MultipartEntry", "has_file", "to_form_data"]
