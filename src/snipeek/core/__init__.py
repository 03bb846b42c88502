"""Zero-copy TLS record and ClientHello decoding."""

from __future__ import annotations

from .client_hello import ClientHello, extract_sni, parse_client_hello
from .config import Config
from .extensions import (
    SERVER_NAME,
    Extension,
    ServerNameEntry,
    find_server_name,
    iter_extensions,
    iter_server_names,
)
from .hostname import is_valid_hostname, parse_server_name
from .record import TLSRecord, parse_record
from .slicer import drop_prefix, read_length, split_sized, take_sized
from .span import ByteSpan

__all__ = [
    "SERVER_NAME",
    "ByteSpan",
    "ClientHello",
    "Config",
    "Extension",
    "ServerNameEntry",
    "TLSRecord",
    "drop_prefix",
    "extract_sni",
    "find_server_name",
    "is_valid_hostname",
    "iter_extensions",
    "iter_server_names",
    "parse_client_hello",
    "parse_record",
    "parse_server_name",
    "read_length",
    "split_sized",
    "take_sized",
]
