"""formwire - request body encoding middlewares for HTTP clients."""

from formwire.core.json_codec import JsonEncoder, resolve_codec
from formwire.core.logger import LogIcon, logger
from formwire.core.settings import Settings
from formwire.core.settings import settings as st
from formwire.middlewares.base import MiddlewareChain, Transport
from formwire.middlewares.json_body import JsonMiddleware
from formwire.middlewares.multipart import MultipartMiddleware
from formwire.middlewares.url_encoded import UrlEncodedMiddleware


def create_pipeline(transport: Transport | None = None, config: Settings = st) -> MiddlewareChain:
    """Build the default multipart -> url-encoded -> JSON chain."""
    logger.info(f"Building {config.NAME} pipeline", icon=LogIcon.PROCESSOR, version=config.VERSION)

    # Multipart first so uploads are claimed before the form encoder sees them
    return (
        MiddlewareChain(transport)
        .register(MultipartMiddleware(boundary=config.MULTIPART_BOUNDARY))
        .register(UrlEncodedMiddleware())
        .register(JsonMiddleware(JsonEncoder(resolve_codec(config.JSON_CODEC))))
    )
