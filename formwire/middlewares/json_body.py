"""JSON body middleware."""

from typing import Any

from formwire.core.json_codec import JsonCodec, JsonEncoder, OrjsonCodec
from formwire.core.logger import LogIcon
from formwire.middlewares.base import BaseMiddleware
from formwire.models.core import MimeType, OutgoingRequest


class JsonMiddleware(BaseMiddleware):
    """Encodes params as JSON when the request declares ``application/json``.

    A string body with a JSON content type is treated as already-encoded JSON
    and left as is.
    """

    mime_type = MimeType.JSON
    icon = LogIcon.JSON

    def __init__(self, encoder: JsonEncoder | None = None) -> None:
        self.encoder = encoder or JsonEncoder(OrjsonCodec())

    @classmethod
    def with_codec(cls, codec: JsonCodec | None) -> "JsonMiddleware":
        return cls(JsonEncoder(codec))

    def process_request(self, request: OutgoingRequest) -> bool:
        # Only an explicit declaration selects JSON; undeclared params are form data
        return bool(request.params) and request.headers.mime_type == self.mime_type

    def encode(self, params: Any) -> str:
        return self.encoder.encode(params)
