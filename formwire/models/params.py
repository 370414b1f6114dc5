"""Parameter tree: the four shapes a request parameter can take."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from formwire.core.errors import InvalidParamError, UnsupportedValueError
from formwire.models.upload import UploadIO

type Scalar = str | bytes | int | float | bool | None


@dataclass(frozen=True, slots=True)
class ScalarParam:
    value: Scalar


@dataclass(frozen=True, slots=True)
class UploadParam:
    upload: UploadIO


@dataclass(frozen=True, slots=True)
class SequenceParam:
    items: tuple["ParamTree", ...]


@dataclass(frozen=True, slots=True)
class MappingParam:
    """Ordered entries; repeated keys are allowed when built from pairs."""

    entries: tuple[tuple[str, "ParamTree"], ...]


type ParamTree = ScalarParam | UploadParam | SequenceParam | MappingParam


def build_tree(value: Any) -> ParamTree:
    """Convert plain Python values into a parameter tree."""
    match value:
        case ScalarParam() | UploadParam() | SequenceParam() | MappingParam():
            return value
        case UploadIO():
            return UploadParam(value)
        case str() | bytes() | bool() | int() | float() | None:
            return ScalarParam(value)
        case Mapping():
            return MappingParam(tuple((str(key), build_tree(item)) for key, item in value.items()))
        case list() | tuple():
            return SequenceParam(tuple(build_tree(item) for item in value))
        case _:
            raise InvalidParamError(f"Unsupported parameter type: {type(value).__name__}")


def build_root(params: Any) -> MappingParam:
    """Build the root of a parameter tree from a mapping or a sequence of pairs."""
    match params:
        case MappingParam():
            return params
        case Mapping():
            return build_tree(params)  # type: ignore[return-value]
        case list() | tuple() if all(isinstance(pair, (list, tuple)) and len(pair) == 2 for pair in params):
            return MappingParam(tuple((str(key), build_tree(item)) for key, item in params))
        case _:
            raise InvalidParamError(
                f"Parameters must be a mapping or a sequence of (key, value) pairs, got {type(params).__name__}"
            )


def scalar_text(value: Scalar) -> str:
    """Text form of a scalar leaf."""
    match value:
        case None:
            return ""
        case True:
            return "true"
        case False:
            return "false"
        case bytes():
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as ex:
                raise UnsupportedValueError(f"Bytes value is not valid UTF-8 text: {ex}") from ex
        case _:
            return str(value)
