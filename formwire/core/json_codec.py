"""JSON bodies through a pluggable codec."""

from typing import Any, Literal, Protocol

import orjson

from formwire.core.errors import MissingCodecError, UnsupportedValueError

MISSING_CODEC_MESSAGE = "No JSON codec available. Install orjson or configure a JSON codec."


class JsonCodec(Protocol):
    def encode(self, value: Any) -> str: ...


class OrjsonCodec:
    """Default codec backed by orjson."""

    def encode(self, value: Any) -> str:
        try:
            return orjson.dumps(value).decode()
        except orjson.JSONEncodeError as ex:
            raise UnsupportedValueError(f"Cannot JSON-encode value: {ex}") from ex


def resolve_codec(name: Literal["orjson", "none"]) -> JsonCodec | None:
    """Codec for a settings name; ``none`` disables JSON encoding."""
    match name:
        case "orjson":
            return OrjsonCodec()
        case "none":
            return None
        case _:
            raise ValueError(f"Unknown JSON codec: {name!r}")


class JsonEncoder:
    """Encodes values with the injected codec, passing strings through as pre-encoded JSON."""

    def __init__(self, codec: JsonCodec | None) -> None:
        self.codec = codec

    def encode(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if self.codec is None:
            raise MissingCodecError(MISSING_CODEC_MESSAGE)
        return self.codec.encode(value)
