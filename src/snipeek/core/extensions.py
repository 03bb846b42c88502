"""ClientHello extension walking and the Server Name Indication sub-walk."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .hostname import parse_server_name
from .slicer import split_sized, take_sized
from .span import ByteSpan

# Extension types are compared as raw wire bytes.
SERVER_NAME = b"\x00\x00"

# SNI name types
NAME_TYPE_HOST_NAME = 0

EXTENSION_HEADER_LEN = 4


@dataclass(slots=True, frozen=True)
class Extension:
    """One (type, length, value) entry of the extensions block."""

    type: bytes
    data: ByteSpan

    @property
    def type_code(self) -> int:
        return self.type[0] << 8 | self.type[1]


@dataclass(slots=True, frozen=True)
class ServerNameEntry:
    """One (name_type, length, value) entry of the SNI server_name_list."""

    name_type: int
    value: ByteSpan


def iter_extensions(exts: ByteSpan) -> Iterator[Extension]:
    """Yield the extensions in ``exts`` in wire order.

    Walking stops once fewer than four bytes remain; such trailing bytes
    are ignored. A length field that overruns the block raises.

    Raises:
        TruncatedBody: If an extension's length runs past the block.
    """
    cursor = exts
    while len(cursor) >= EXTENSION_HEADER_LEN:
        ext_type = cursor.sub(0, 2).tobytes()
        data, cursor = split_sized(cursor, 2, 4)
        yield Extension(ext_type, data)


def iter_server_names(ext_data: ByteSpan) -> Iterator[ServerNameEntry]:
    """Yield the entries of one SNI extension's server_name_list.

    Entries of every name type are yielded; a list tail of three bytes or
    fewer is ignored.

    Raises:
        TruncatedLength: If the payload cannot hold the 2-byte list length.
        TruncatedBody: If the list or an entry overruns its container.
    """
    data = take_sized(ext_data, 0, 2)
    while len(data) > 3:
        name_type = data[0]
        value, data = split_sized(data, 1, 3)
        yield ServerNameEntry(name_type, value)


def find_server_name(exts: ByteSpan) -> ByteSpan | None:
    """Return the span of the first valid host_name in the extensions block.

    The whole block is walked even after a match so that malformed framing
    later in the message still fails the parse. Only the first host_name
    entry is validated; later ones never replace it.

    Raises:
        DecodeError: On malformed framing or an invalid first hostname.
    """
    found: ByteSpan | None = None
    for extension in iter_extensions(exts):
        if extension.type != SERVER_NAME:
            continue
        for entry in iter_server_names(extension.data):
            if entry.name_type == NAME_TYPE_HOST_NAME and found is None:
                parse_server_name(entry.value)
                found = entry.value
    return found
