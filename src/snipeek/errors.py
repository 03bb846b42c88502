"""Decode errors raised by the ClientHello parser.

Every error is terminal for the call that raised it and carries nothing but
a stable ``code`` and a static description. Callers that only care about
routing can catch :class:`DecodeError` and fall back to a default.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all ClientHello decoding failures."""

    code = "decode_error"
    message = "malformed tls record"

    def __init__(self) -> None:
        super().__init__(self.message)


class TruncatedLength(DecodeError):
    """The buffer ends before a length field is complete."""

    code = "truncated_length"
    message = "lack data to decode length"


class TruncatedBody(DecodeError):
    """A decoded length runs past the end of the enclosing buffer."""

    code = "truncated_body"
    message = "not enough data"


class UnsupportedVersion(DecodeError):
    code = "unsupported_version"
    message = "unknown tls version"


class NotHandshake(DecodeError):
    code = "not_handshake"
    message = "not handshake"


class NotClientHello(DecodeError):
    code = "not_client_hello"
    message = "not client hello"


class UnsupportedClientVersion(DecodeError):
    code = "unsupported_client_version"
    message = "unsupported client version"


class NotUtf8(DecodeError):
    code = "not_utf8"
    message = "server name not utf-8 string"


class TooLong(DecodeError):
    code = "too_long"
    message = "server name too long"


class IllegalChar(DecodeError):
    code = "illegal_char"
    message = "illegal char in server name"


__all__ = [
    "DecodeError",
    "IllegalChar",
    "NotClientHello",
    "NotHandshake",
    "NotUtf8",
    "TooLong",
    "TruncatedBody",
    "TruncatedLength",
    "UnsupportedClientVersion",
    "UnsupportedVersion",
]
