"""TLS record layer framing."""

from __future__ import annotations

from dataclasses import dataclass

from .slicer import take_sized
from .span import BufferLike, ByteSpan

# TLS record content types
TLS_CHANGE_CIPHER_SPEC = 20
TLS_ALERT = 21
TLS_HANDSHAKE = 22
TLS_APPLICATION_DATA = 23

RECORD_HEADER_LEN = 5

CONTENT_TYPE_NAMES = {
    TLS_CHANGE_CIPHER_SPEC: "change_cipher_spec",
    TLS_ALERT: "alert",
    TLS_HANDSHAKE: "handshake",
    TLS_APPLICATION_DATA: "application_data",
}


@dataclass(slots=True, frozen=True)
class TLSRecord:
    """One TLS record as laid out on the wire.

    Attributes:
        content_type: Record content type (22 = handshake).
        version_major: Major protocol version byte (3 for SSL 3.0 to TLS 1.3).
        version_minor: Minor protocol version byte, kept but not validated.
        fragment: The record body, sized by the 2-byte length at bytes 3..5.
    """

    content_type: int
    version_major: int
    version_minor: int
    fragment: ByteSpan

    @property
    def version(self) -> int:
        """Record version as a 16-bit integer (e.g., 0x0301)."""
        return self.version_major << 8 | self.version_minor

    @property
    def length(self) -> int:
        return len(self.fragment)

    @property
    def content_type_name(self) -> str:
        """Name of the content type, or "unknown" for unassigned values."""
        return CONTENT_TYPE_NAMES.get(self.content_type, "unknown")


def parse_record(data: BufferLike | ByteSpan) -> TLSRecord:
    """Parse the TLS record at the start of ``data``.

    Bytes following the record are ignored.

    Raises:
        TruncatedLength: If ``data`` is shorter than the 5-byte header.
        TruncatedBody: If ``data`` is shorter than the declared record.
    """
    span = ByteSpan.of(data)
    fragment = take_sized(span, 3, RECORD_HEADER_LEN)
    return TLSRecord(
        content_type=span[0],
        version_major=span[1],
        version_minor=span[2],
        fragment=fragment,
    )
