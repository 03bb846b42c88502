"""ClientHello decoding and SNI extraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import (
    DecodeError,
    NotClientHello,
    NotHandshake,
    UnsupportedClientVersion,
    UnsupportedVersion,
)
from .extensions import find_server_name
from .record import TLS_HANDSHAKE, TLSRecord, parse_record
from .slicer import drop_prefix, take_sized
from .span import BufferLike, ByteSpan

logger = logging.getLogger(__name__)

# TLS handshake message types
TLS_CLIENT_HELLO = 1

SSL3_MAJOR_VERSION = 3

# client_version (2) + random (32); the session id length byte follows.
SESSION_ID_LEN_OFFSET = 34


@dataclass(slots=True, frozen=True)
class ClientHello:
    """The parts of a ClientHello this package cares about.

    Attributes:
        record: The record that carried the message.
        client_version: ``(major, minor)`` from the handshake body.
        extensions: The extensions block, empty when the client sent none.
        server_name_span: View of the SNI host_name bytes inside the
            original buffer, or None when the client sent no hostname.
    """

    record: TLSRecord
    client_version: tuple[int, int]
    extensions: ByteSpan
    server_name_span: ByteSpan | None = None

    @property
    def server_name(self) -> str | None:
        """The SNI hostname as text, or None."""
        if self.server_name_span is None:
            return None
        return self.server_name_span.tobytes().decode("ascii")


def parse_client_hello(data: BufferLike | ByteSpan) -> ClientHello:
    """Parse the ClientHello carried by the TLS record at the start of ``data``.

    Args:
        data: A buffer holding at least one complete TLS record.

    Returns:
        The decoded ClientHello. A message with no SNI extension, or with no
        extensions block at all, has ``server_name`` None.

    Raises:
        DecodeError: One of its subclasses when the record is truncated,
            is not a TLS handshake, is not a ClientHello, or carries an
            invalid hostname.
    """
    record = parse_record(data)
    if record.version_major != SSL3_MAJOR_VERSION:
        raise UnsupportedVersion()
    if record.content_type != TLS_HANDSHAKE:
        raise NotHandshake()

    fragment = record.fragment
    if fragment.get(0) != TLS_CLIENT_HELLO:
        raise NotClientHello()
    hello = take_sized(fragment, 1, 4)
    if hello.get(0) != SSL3_MAJOR_VERSION:
        raise UnsupportedClientVersion()
    client_version = (hello[0], hello.get(1) or 0)

    # random + session id, cipher suites, compression methods
    remaining = drop_prefix(hello, SESSION_ID_LEN_OFFSET, SESSION_ID_LEN_OFFSET + 1)
    remaining = drop_prefix(remaining, 0, 2)
    remaining = drop_prefix(remaining, 0, 1)

    if not remaining:
        # The extensions block is optional and absent here.
        return ClientHello(record, client_version, remaining)

    exts = take_sized(remaining, 0, 2)
    return ClientHello(record, client_version, exts, find_server_name(exts))


def extract_sni(data: BufferLike | ByteSpan) -> str | None:
    """Return the SNI hostname in ``data``, or None if it cannot be had.

    Any decode failure is logged at DEBUG level and reported as None, for
    callers that only need a routing hint.
    """
    try:
        return parse_client_hello(data).server_name
    except DecodeError as e:
        logger.debug(f"No SNI available: {e.code} ({e})")
        return None
