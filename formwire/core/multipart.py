"""multipart/form-data bodies composed lazily over a composite stream."""

from collections.abc import Iterable
from typing import Any

from formwire.core.composite import CompositeStream, Source
from formwire.core.errors import UnsupportedValueError
from formwire.core.flatten import Pair, flatten
from formwire.models.core import DEFAULT_BOUNDARY, MimeType
from formwire.models.params import scalar_text
from formwire.models.upload import UploadIO

CRLF = b"\r\n"

_HEADER_PARAM_ESCAPES = str.maketrans({'"': "%22", "\r": "%0D", "\n": "%0A"})


def quote_header_param(value: str) -> str:
    """Escape a Content-Disposition parameter value the way browsers do."""
    return value.translate(_HEADER_PARAM_ESCAPES)


class MultipartBuilder:
    """Frames flattened pairs as multipart sections separated by one boundary."""

    def __init__(self, boundary: str = DEFAULT_BOUNDARY) -> None:
        if not boundary or len(boundary) > 70:
            raise ValueError(f"Multipart boundary must be 1-70 characters, got {len(boundary)}")
        self.boundary = boundary

    @property
    def content_type(self) -> str:
        return f"{MimeType.MULTIPART};boundary={self.boundary}"

    def preamble(self, key: str, upload: UploadIO | None = None) -> bytes:
        """Boundary line plus part headers, up to and including the blank line."""
        disposition = f'Content-Disposition: form-data; name="{quote_header_param(key)}"'
        lines = [f"--{self.boundary}"]
        if upload is None:
            lines.append(disposition)
        else:
            lines.append(f'{disposition}; filename="{quote_header_param(upload.name)}"')
            lines.append(f"Content-Type: {upload.content_type}")
        return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")

    def part(self, key: str, value: Any) -> list[Source]:
        """Sources for one section: buffers for scalars, the upload itself for files."""
        match value:
            case UploadIO():
                return [self.preamble(key, value), value, CRLF]
            case bytes():
                return [self.preamble(key) + value + CRLF]
            case _:
                return [self.preamble(key) + scalar_text(value).encode("utf-8") + CRLF]

    def terminator(self) -> bytes:
        return f"--{self.boundary}--\r\n".encode("utf-8")

    def build(self, pairs: Iterable[Pair]) -> CompositeStream:
        """Assemble every section and the closing boundary into one stream."""
        sources: list[Source] = []
        seen: dict[int, str] = {}
        for key, value in pairs:
            if isinstance(value, UploadIO):
                # One shared cursor per source: a second occurrence would read nothing
                if id(value.source) in seen:
                    raise UnsupportedValueError(
                        f"Upload {value.name!r} at {key!r} already sent as {seen[id(value.source)]!r}"
                    )
                seen[id(value.source)] = key
            sources.extend(self.part(key, value))
        sources.append(self.terminator())
        return CompositeStream(sources)


def build_multipart(params: Any, boundary: str = DEFAULT_BOUNDARY) -> CompositeStream:
    """Flatten nested params and frame them as a multipart body."""
    return MultipartBuilder(boundary).build(flatten(params))
