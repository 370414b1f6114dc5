"""application/x-www-form-urlencoded bodies with nested bracket keys."""

import re
from collections.abc import Iterable
from typing import Any
from urllib.parse import parse_qsl, quote_plus

from formwire.core.errors import InvalidParamError, UnsupportedValueError
from formwire.core.flatten import Pair, flatten
from formwire.models.params import scalar_text
from formwire.models.upload import UploadIO

# Brackets delimit nesting and stay literal in keys.
KEY_SAFE_CHARS = "[]"

_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


def encode_pairs(pairs: Iterable[Pair]) -> str:
    """Percent-encode flattened pairs and join them as ``key=value&...``."""
    encoded: list[str] = []
    for key, value in pairs:
        if isinstance(value, UploadIO):
            raise UnsupportedValueError(
                f"Cannot url-encode upload {value.name!r} at {key!r}; send it as multipart/form-data"
            )
        # Raw bytes are percent-encoded as is, whatever their charset
        text = value if isinstance(value, bytes) else scalar_text(value)
        encoded.append(f"{quote_plus(key, safe=KEY_SAFE_CHARS)}={quote_plus(text)}")
    return "&".join(encoded)


def build_nested_query(params: Any) -> str:
    """Flatten nested params and url-encode them."""
    return encode_pairs(flatten(params))


def _split_key(name: str) -> list[str]:
    head, bracket, _ = name.partition("[")
    if not bracket:
        return [name]
    return [head, *_SEGMENT_RE.findall(name, len(head))]


def _has_path(container: dict, keys: list[str]) -> bool:
    node: Any = container
    for key in filter(None, keys):
        if not isinstance(node, dict) or key not in node:
            return False
        node = node[key]
    return True


def _store(container: dict, keys: list[str], value: str) -> None:
    key, *rest = keys
    if not rest:
        if isinstance(container.get(key), (dict, list)):
            raise InvalidParamError(f"Expected a scalar for {key!r}, found a nested value")
        container[key] = value
        return

    if rest[0] == "":
        items = container.setdefault(key, [])
        if not isinstance(items, list):
            raise InvalidParamError(f"Expected a list for {key!r}, got {type(items).__name__}")
        child = rest[1:]
        if not child:
            items.append(value)
        elif items and isinstance(items[-1], dict) and not _has_path(items[-1], child):
            _store(items[-1], child, value)
        else:
            items.append({})
            _store(items[-1], child, value)
        return

    nested = container.setdefault(key, {})
    if not isinstance(nested, dict):
        raise InvalidParamError(f"Expected a mapping for {key!r}, got {type(nested).__name__}")
    _store(nested, rest, value)


def parse_nested_query(query: str) -> dict[str, Any]:
    """Rebuild nested params from a bracket-keyed query string.

    Sequence order comes from encounter order; a new element of a list of
    mappings starts when the last element already holds the incoming key.
    """
    params: dict[str, Any] = {}
    for name, value in parse_qsl(query, keep_blank_values=True):
        keys = _split_key(name)
        if not keys[0]:
            continue
        _store(params, keys, value)
    return params
