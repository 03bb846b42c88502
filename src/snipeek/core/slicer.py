"""Length-prefixed slicing primitives.

TLS frames nearly every variable-length field as a big-endian length
followed by that many bytes. The helpers here decode such a length from a
caller-chosen byte range (1, 2 or 3 bytes wide) and return the framed body,
the bytes after it, or both. Nothing is copied: results are
:class:`~snipeek.core.span.ByteSpan` views over the same buffer.
"""

from __future__ import annotations

from ..errors import TruncatedBody, TruncatedLength
from .span import ByteSpan


def read_length(span: ByteSpan, start: int, stop: int) -> int:
    """Decode the unsigned big-endian integer stored in ``span[start:stop]``.

    Raises:
        TruncatedLength: If the length field is not inside ``span``.
    """
    field = span.sub(start, stop)
    if field is None:
        raise TruncatedLength()
    length = 0
    for byte in field.view():
        length = length << 8 | byte
    return length


def split_sized(span: ByteSpan, start: int, stop: int) -> tuple[ByteSpan, ByteSpan]:
    """Return ``(body, rest)`` for the field whose length sits at ``[start, stop)``.

    ``body`` is the ``length`` bytes right after the length field and
    ``rest`` is everything after ``body``.

    Raises:
        TruncatedLength: If the length field is not inside ``span``.
        TruncatedBody: If the body runs past the end of ``span``.
    """
    length = read_length(span, start, stop)
    body = span.sub(stop, stop + length)
    if body is None:
        raise TruncatedBody()
    return body, span.tail(stop + length)


def take_sized(span: ByteSpan, start: int, stop: int) -> ByteSpan:
    """Return the length-prefixed body following ``span[start:stop]``."""
    return split_sized(span, start, stop)[0]


def drop_prefix(span: ByteSpan, start: int, stop: int) -> ByteSpan:
    """Return what remains of ``span`` after the length-prefixed body."""
    return split_sized(span, start, stop)[1]
