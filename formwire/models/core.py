"""Core models for outgoing request encoding."""

from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

DEFAULT_BOUNDARY = "-----------FormwireMultipartBoundary"


class MimeType(StrEnum):
    """Content types produced by the encoding middlewares."""

    URL_ENCODED = "application/x-www-form-urlencoded"
    JSON = "application/json"
    MULTIPART = "multipart/form-data"


class Headers(MutableMapping[str, str]):
    """Case-insensitive header mapping that keeps the first spelling of each name."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        if data:
            self.update(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()][1]

    def __setitem__(self, key: str, value: str) -> None:
        name = self._data.get(key.lower(), (key, value))[0]
        self._data[key.lower()] = (name, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())})"

    @property
    def mime_type(self) -> str | None:
        """Declared content type without parameters, lowercased."""
        value = self.get("content-type")
        if not value:
            return None
        return value.split(";", 1)[0].strip().lower()


@dataclass
class OutgoingRequest:
    """In-flight request as seen by the encoding middlewares.

    ``body`` carries the raw parameter tree until a middleware replaces it with
    an encoded payload (``str`` or a composite stream).
    """

    method: str = "POST"
    url: str = "/"
    headers: Headers = field(default_factory=Headers)
    body: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)

    @property
    def params(self) -> Mapping | list | tuple | None:
        """Unencoded parameter tree, or None once the body is encoded."""
        if isinstance(self.body, (Mapping, list, tuple)):
            return self.body
        return None
