"""Test fixtures for formwire unit tests."""

from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from formwire.main import create_pipeline
from formwire.middlewares.base import MiddlewareChain
from formwire.middlewares.json_body import JsonMiddleware
from formwire.models.core import Headers, OutgoingRequest
from formwire.models.upload import UploadIO


# -----------------------------------------------------------------------------
# Echo transport
# -----------------------------------------------------------------------------


@dataclass
class EchoResponse:
    """What a transport saw: the final headers and body."""

    headers: Headers = field(default_factory=Headers)
    body: Any = None


def echo_transport(request: OutgoingRequest) -> EchoResponse:
    """Echo back the content type and body the middlewares produced."""
    headers = Headers()
    if "Content-Type" in request.headers:
        headers["Content-Type"] = request.headers["Content-Type"]
    body = "" if request.body is None else request.body
    return EchoResponse(headers=headers, body=body)


# -----------------------------------------------------------------------------
# Pipeline fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def pipeline() -> MiddlewareChain:
    """Default multipart -> url-encoded -> JSON chain with an echo transport."""
    return create_pipeline(transport=echo_transport)


@pytest.fixture
def post(pipeline: MiddlewareChain):
    """Factory fixture posting a body with optional headers through the pipeline."""

    def _post(body: Any = None, headers: dict[str, str] | None = None) -> EchoResponse:
        return pipeline(OutgoingRequest(method="POST", url="/echo", headers=Headers(headers), body=body))

    return _post


@pytest.fixture
def without_json_codec(pipeline: MiddlewareChain, monkeypatch: pytest.MonkeyPatch) -> MiddlewareChain:
    """Remove the JSON codec for the duration of one test."""
    for middleware in pipeline.middlewares:
        if isinstance(middleware, JsonMiddleware):
            monkeypatch.setattr(middleware.encoder, "codec", None)
    return pipeline


# -----------------------------------------------------------------------------
# Upload fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "report.txt"
    path.write_bytes(b"line one\nline two\n" * 100)
    return path


@pytest.fixture
def sample_upload(sample_file: Path) -> Generator[UploadIO, None, None]:
    upload = UploadIO.from_path(sample_file, "text/plain")
    yield upload
    upload.close()
