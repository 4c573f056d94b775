"""Field value variants carried by a form.

Plain values (``str``, ``bool``, numbers, ``None``) are stored as-is. File
uploads are wrapped so the encoder can tell them apart from scalars without
guessing from arbitrary objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Iterable, Iterator, List, Optional, Union


@dataclass(frozen=True)
class FileBlob:
    """Single file attached to a form field."""

    filename: str
    """Name reported to the server in the multipart part header."""

    content: Union[bytes, IO[bytes]]
    """Raw bytes or a readable binary handle."""

    content_type: Optional[str] = None
    """MIME type; ``None`` lets the transport pick a default."""

    def __post_init__(self) -> None:
        if not isinstance(self.filename, str):
            raise ValueError("FileBlob filename must be a string.")

    def as_part(self) -> tuple:
        """Return the ``(filename, content[, content_type])`` tuple used by requests."""
        if self.content_type:
            return (self.filename, self.content, self.content_type)
        return (self.filename, self.content)


@dataclass(frozen=True)
class FileList:
    """Ordered collection of files selected for one field."""

    items: List[FileBlob] = field(default_factory=list)

    def __post_init__(self) -> None:
        for item in self.items:
            if not isinstance(item, FileBlob):
                raise ValueError("FileList items must be FileBlob instances.")

    @classmethod
    def of(cls, *blobs: FileBlob) -> "FileList":
        return cls(list(blobs))

    @classmethod
    def from_iterable(cls, blobs: Iterable[FileBlob]) -> "FileList":
        return cls(list(blobs))

    def __iter__(self) -> Iterator[FileBlob]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def item(self, index: int) -> FileBlob:
        return self.items[index]


FieldValue = Union[str, bool, int, float, None, FileBlob, FileList]


def is_file_value(value: object) -> bool:
    """Return True for values that force multipart encoding."""
    return isinstance(value, (FileBlob, FileList))


__all__ = ["FieldValue", "FileBlob", "FileList", "is_file_value"]
