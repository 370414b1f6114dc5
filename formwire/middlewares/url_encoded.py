"""URL-encoded form body middleware."""

from typing import Any

from formwire.core.logger import LogIcon
from formwire.core.urlencode import build_nested_query
from formwire.middlewares.base import BaseMiddleware
from formwire.models.core import MimeType


class UrlEncodedMiddleware(BaseMiddleware):
    """Encodes nested params as ``application/x-www-form-urlencoded``."""

    mime_type = MimeType.URL_ENCODED
    icon = LogIcon.FORM

    def encode(self, params: Any) -> str:
        return build_nested_query(params)
