"""File attachments for multipart request bodies."""

import io
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from formwire.core.errors import MalformedUploadError, UnsupportedValueError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class UploadIO:
    """Named, typed reference to a readable byte source.

    The source is borrowed: encoders read from it but never close it. Only
    handles opened by :meth:`from_path` are owned and closed by :meth:`close`.
    """

    __slots__ = ("name", "content_type", "source", "_owned")

    def __init__(
        self,
        source: BinaryIO | bytes | bytearray,
        content_type: str = DEFAULT_CONTENT_TYPE,
        name: str | None = None,
    ) -> None:
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        if not callable(getattr(source, "read", None)):
            raise MalformedUploadError(f"Upload source is not readable: {type(source).__name__}")

        if content_type and ("\r" in content_type or "\n" in content_type):
            raise UnsupportedValueError(f"Upload content type cannot contain line breaks: {content_type!r}")

        self.source = source
        self.content_type = content_type or DEFAULT_CONTENT_TYPE
        self.name = name or Path(str(getattr(source, "name", "") or "upload")).name
        self._owned = False

    @classmethod
    def from_path(cls, path: str | Path, content_type: str = DEFAULT_CONTENT_TYPE, name: str | None = None) -> "UploadIO":
        """Open a file for upload. The returned handle owns the file."""
        path = Path(path)
        try:
            handle = path.open("rb")
        except OSError as ex:
            raise MalformedUploadError(f"Cannot open upload source {path}: {ex}") from ex

        upload = cls(handle, content_type, name or path.name)
        upload._owned = True
        return upload

    def __repr__(self) -> str:
        return f"UploadIO(name={self.name!r}, content_type={self.content_type!r})"

    @property
    def closed(self) -> bool:
        return bool(getattr(self.source, "closed", False))

    def length(self) -> int:
        """Bytes left from the current position, probed without consuming them."""
        try:
            start = self.source.tell()
            self.source.seek(0, io.SEEK_END)
            end = self.source.tell()
            self.source.seek(start)
        except (AttributeError, OSError, ValueError) as ex:
            raise MalformedUploadError(f"Cannot measure upload source {self.name!r}: {ex}") from ex
        return end - start

    def read(self, size: int) -> bytes:
        try:
            return self.source.read(size)
        except (OSError, ValueError) as ex:
            raise MalformedUploadError(f"Cannot read upload source {self.name!r}: {ex}") from ex

    def close(self) -> None:
        """Close the underlying file if this handle opened it. Safe to call twice."""
        if self._owned and not self.closed:
            self.source.close()


@contextmanager
def open_upload(
    path: str | Path,
    content_type: str = DEFAULT_CONTENT_TYPE,
    name: str | None = None,
) -> Generator[UploadIO, None, None]:
    """Context manager for an upload backed by a file on disk."""
    upload = UploadIO.from_path(path, content_type, name)
    try:
        yield upload
    finally:
        upload.close()
