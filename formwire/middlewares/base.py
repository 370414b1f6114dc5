"""Base middleware architecture for request body encoding."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

import structlog

from formwire.core.logger import LogIcon, logger
from formwire.models.core import MimeType, OutgoingRequest

type Transport = Callable[[OutgoingRequest], Any]


class BaseMiddleware(ABC):
    """Abstract encoding middleware: decide, encode, then set the content type."""

    mime_type: ClassVar[MimeType]
    icon: ClassVar[LogIcon] = LogIcon.PROCESSOR

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        # Concrete encoders must declare which content type they produce
        if not inspect.isabstract(cls) and not isinstance(getattr(cls, "mime_type", None), MimeType):
            raise TypeError(f"{cls.__name__} must declare a MimeType mime_type")

    @property
    def content_type(self) -> str:
        """Header value written when the request declares none."""
        return str(self.mime_type)

    def process_request(self, request: OutgoingRequest) -> bool:
        """Encode only unencoded params whose declared type is absent or ours."""
        if not request.params:
            return False
        declared = request.headers.mime_type
        return declared is None or declared == self.mime_type

    @abstractmethod
    def encode(self, params: Any) -> Any:
        """Turn the parameter tree into a transmittable body."""

    def before(self, request: OutgoingRequest) -> OutgoingRequest:
        """Called before the request reaches the transport."""
        if not self.process_request(request):
            logger.debug(f"{self.__class__.__name__} skipped", icon=LogIcon.SKIP)
            return request

        request.body = self.encode(request.params)
        request.headers.setdefault("Content-Type", self.content_type)
        logger.debug(f"Encoded body as {self.mime_type}", icon=self.icon)
        return request


class MiddlewareChain:
    """Runs encoding middlewares in registration order, then the transport."""

    def __init__(self, transport: Transport | None = None) -> None:
        self._transport = transport
        self._middlewares: list[BaseMiddleware] = []

    @property
    def middlewares(self) -> tuple[BaseMiddleware, ...]:
        return tuple(self._middlewares)

    def register(self, middleware: BaseMiddleware) -> "MiddlewareChain":
        """Register a middleware. Returns self for chaining."""
        self._middlewares.append(middleware)
        logger.info(f"Registered middleware: {middleware.__class__.__name__}", icon=LogIcon.ADAPTER)
        return self

    def process(self, request: OutgoingRequest) -> OutgoingRequest:
        """Apply every middleware's before hook, tagging their log lines with the request."""
        with structlog.contextvars.bound_contextvars(method=request.method, url=request.url):
            for middleware in self._middlewares:
                request = middleware.before(request)
        return request

    def __call__(self, request: OutgoingRequest) -> Any:
        """Encode the request and hand it to the transport, if one is set."""
        request = self.process(request)
        if self._transport is None:
            return request
        return self._transport(request)
