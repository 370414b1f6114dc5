"""Tests for upload handles."""

import io
from pathlib import Path

import pytest

from formwire.core.errors import MalformedUploadError, UnsupportedValueError
from formwire.models.upload import DEFAULT_CONTENT_TYPE, UploadIO, open_upload


class Unseekable(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        return b""


def test_from_path_sets_name_and_owns_file(sample_file: Path) -> None:
    upload = UploadIO.from_path(sample_file, "text/plain")
    assert upload.name == "report.txt"
    assert upload.content_type == "text/plain"
    assert upload.length() == sample_file.stat().st_size

    upload.close()
    upload.close()
    assert upload.closed


def test_from_path_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MalformedUploadError, match="Cannot open upload source"):
        UploadIO.from_path(tmp_path / "missing.bin")


def test_borrowed_source_is_not_closed(sample_file: Path) -> None:
    with open(sample_file, "rb") as handle:
        upload = UploadIO(handle)
        upload.close()
        assert not handle.closed


def test_bytes_source_defaults() -> None:
    upload = UploadIO(b"abc")
    assert upload.name == "upload"
    assert upload.content_type == DEFAULT_CONTENT_TYPE
    assert upload.length() == 3


def test_explicit_name_wins() -> None:
    assert UploadIO(io.BytesIO(b"x"), "image/png", "avatar.png").name == "avatar.png"


def test_unreadable_source() -> None:
    with pytest.raises(MalformedUploadError, match="not readable"):
        UploadIO(42)  # type: ignore[arg-type]


def test_unseekable_source_cannot_be_measured() -> None:
    with pytest.raises(MalformedUploadError, match="Cannot measure"):
        UploadIO(Unseekable(), name="pipe").length()


def test_length_probe_rewinds() -> None:
    source = io.BytesIO(b"0123456789")
    source.seek(3)
    assert UploadIO(source).length() == 7
    assert source.tell() == 3


def test_open_upload_closes_on_exit(sample_file: Path) -> None:
    with open_upload(sample_file, "text/plain") as upload:
        assert upload.read(4) == b"line"
    assert upload.closed


@pytest.mark.parametrize("content_type", ["text/plain\r\nX-Injected: 1", "text/plain\nX: 1"])
def test_content_type_with_line_breaks_is_rejected(content_type: str) -> None:
    with pytest.raises(UnsupportedValueError, match="line breaks"):
        UploadIO(b"x", content_type)
