"""Multipart form body middleware."""

from typing import Any

from formwire.core.composite import CompositeStream
from formwire.core.flatten import contains_upload, flatten
from formwire.core.logger import LogIcon, logger
from formwire.core.multipart import MultipartBuilder
from formwire.middlewares.base import BaseMiddleware
from formwire.models.core import DEFAULT_BOUNDARY, MimeType, OutgoingRequest


class MultipartMiddleware(BaseMiddleware):
    """Streams params as ``multipart/form-data``.

    Any upload in the params forces multipart, whatever content type was
    declared, since no other encoding can carry file contents.
    """

    mime_type = MimeType.MULTIPART
    icon = LogIcon.MULTIPART

    def __init__(self, boundary: str = DEFAULT_BOUNDARY) -> None:
        self.builder = MultipartBuilder(boundary)

    @property
    def content_type(self) -> str:
        return self.builder.content_type

    def process_request(self, request: OutgoingRequest) -> bool:
        if not request.params:
            return False
        return request.headers.mime_type == self.mime_type or contains_upload(request.params)

    def encode(self, params: Any) -> CompositeStream:
        return self.builder.build(flatten(params))

    def before(self, request: OutgoingRequest) -> OutgoingRequest:
        if not self.process_request(request):
            return request

        declared = request.headers.mime_type
        if declared not in (None, self.mime_type):
            logger.warning(
                "Uploads present, overriding declared content type",
                icon=LogIcon.WARNING,
                declared=declared,
            )

        body = self.encode(request.params)
        length = body.length()
        request.body = body
        # A declared multipart type carries no usable boundary, so always replace it
        request.headers["Content-Type"] = self.content_type
        request.headers["Content-Length"] = str(length)
        logger.debug("Encoded multipart body", icon=self.icon, parts=len(body.sources), length=length)
        return request
