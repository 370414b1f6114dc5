"""Flatten nested parameters into bracket-keyed pairs."""

from collections.abc import Iterator, Mapping
from typing import Any

from formwire.models.params import (
    MappingParam,
    ParamTree,
    Scalar,
    ScalarParam,
    SequenceParam,
    UploadParam,
    build_root,
)
from formwire.models.upload import UploadIO

type Pair = tuple[str, Scalar | UploadIO]


def iter_pairs(node: ParamTree, prefix: str = "") -> Iterator[Pair]:
    """Walk a parameter tree depth-first, yielding one pair per leaf."""
    match node:
        case ScalarParam(value=value):
            yield prefix, value
        case UploadParam(upload=upload):
            yield prefix, upload
        case SequenceParam(items=items):
            for item in items:
                yield from iter_pairs(item, f"{prefix}[]")
        case MappingParam(entries=entries):
            for key, item in entries:
                yield from iter_pairs(item, f"{prefix}[{key}]" if prefix else key)


def flatten(params: Any) -> list[Pair]:
    """Flatten a mapping (or sequence of pairs) of nested parameters.

    ``{"a": 1, "b": {"c": 2}, "d": [3, 4]}`` becomes
    ``[("a", 1), ("b[c]", 2), ("d[]", 3), ("d[]", 4)]``. Empty mappings and
    sequences produce no pairs.
    """
    return list(iter_pairs(build_root(params)))


def contains_upload(params: Any) -> bool:
    """Whether any leaf of the parameters is an upload.

    Works on plain values as well as trees so leaves only a JSON codec
    understands do not fail the check.
    """
    match params:
        case UploadIO() | UploadParam():
            return True
        case Mapping():
            return any(contains_upload(item) for item in params.values())
        case list() | tuple():
            return any(contains_upload(item) for item in params)
        case SequenceParam(items=items):
            return any(contains_upload(item) for item in items)
        case MappingParam(entries=entries):
            return any(contains_upload(item) for _, item in entries)
        case _:
            return False
