"""Exceptions raised while encoding request bodies."""


class EncodingError(Exception):
    """Base exception for request body encoding failures."""


class MissingCodecError(EncodingError):
    """JSON encoding was requested but no codec is configured."""


class UnsupportedValueError(EncodingError, ValueError):
    """A value cannot be carried by the selected encoding."""


class MalformedUploadError(EncodingError):
    """An upload source cannot be opened, measured or fully read."""


class InvalidParamError(EncodingError, TypeError):
    """A parameter tree or nested query has an unsupported shape."""
