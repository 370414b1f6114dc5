"""Single-pass byte stream spanning in-memory buffers and uploads."""

from collections.abc import Iterable, Iterator

from formwire.core.errors import MalformedUploadError
from formwire.core.settings import settings as st
from formwire.models.upload import UploadIO

type Source = bytes | UploadIO


class CompositeStream:
    """Concatenation of ordered byte sources, read front to back.

    Buffers are sliced in place and uploads are read in chunks, so the body is
    never materialised as a whole. The cursor only moves forward and is not
    thread-safe: a single consumer drains the stream.
    """

    __slots__ = ("_sources", "_lengths", "_index", "_offset", "_chunk_size")

    def __init__(self, sources: Iterable[Source], chunk_size: int | None = None) -> None:
        self._sources: tuple[Source, ...] = tuple(
            bytes(source) if isinstance(source, (bytearray, memoryview)) else source for source in sources
        )
        self._lengths: tuple[int, ...] | None = None
        self._index = 0
        self._offset = 0
        self._chunk_size = chunk_size or st.STREAM_CHUNK_SIZE

    def __repr__(self) -> str:
        return f"CompositeStream(sources={len(self._sources)}, index={self._index}, offset={self._offset})"

    @property
    def sources(self) -> tuple[Source, ...]:
        return self._sources

    @property
    def closed(self) -> bool:
        return self._index >= len(self._sources)

    def _source_lengths(self) -> tuple[int, ...]:
        if self._lengths is None:
            self._lengths = tuple(
                len(source) if isinstance(source, bytes) else source.length() for source in self._sources
            )
        return self._lengths

    def length(self) -> int:
        """Total byte count across all sources, probed once and cached."""
        return sum(self._source_lengths())

    def __len__(self) -> int:
        return self.length()

    def readable(self) -> bool:
        return True

    def read_next(self, max_bytes: int) -> bytes:
        """Read up to ``max_bytes``, moving on to the next source when one runs out.

        Returns ``b""`` once every source is exhausted.
        """
        if self.closed:
            return b""

        lengths = self._source_lengths()
        chunks: list[bytes] = []
        wanted = max_bytes

        while wanted > 0 and self._index < len(self._sources):
            source = self._sources[self._index]
            remaining = lengths[self._index] - self._offset
            if remaining <= 0:
                self._index += 1
                self._offset = 0
                continue

            size = min(wanted, remaining)
            if isinstance(source, bytes):
                chunk = source[self._offset:self._offset + size]
            else:
                chunk = source.read(size)
                if not chunk:
                    raise MalformedUploadError(
                        f"Upload {source.name!r} ended after {self._offset} of {lengths[self._index]} bytes"
                    )

            chunks.append(chunk)
            self._offset += len(chunk)
            wanted -= len(chunk)

        return b"".join(chunks)

    def read(self, size: int = -1) -> bytes:
        """File-like read; a negative size drains everything left."""
        if size is None or size < 0:
            return b"".join(iter(self))
        return self.read_next(size)

    def __iter__(self) -> Iterator[bytes]:
        while chunk := self.read_next(self._chunk_size):
            yield chunk

    def close(self) -> None:
        """Abandon the stream. Borrowed upload sources are left open."""
        self._index = len(self._sources)
        self._offset = 0
