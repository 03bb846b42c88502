"""snipeek - Zero-copy TLS ClientHello decoding for SNI routing.

snipeek reads the Server Name Indication hostname out of the first TLS
record a client sends, without copying the buffer it was handed.

Example:
    >>> import snipeek
    >>> hello = snipeek.parse_client_hello(first_record)
    >>> hello.server_name
    'www.google.com'

Routing callers that only need a hint:
    >>> snipeek.extract_sni(first_record) or "default.backend"
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _resolve_version() -> str:
    """Resolve the installed package version."""
    try:
        return _pkg_version("snipeek")
    except PackageNotFoundError:
        # Source checkout without an installed distribution.
        return "0.0.0"


__version__ = _resolve_version()

from .core.client_hello import ClientHello, extract_sni, parse_client_hello
from .core.config import Config
from .core.record import TLSRecord, parse_record
from .core.span import ByteSpan
from .errors import DecodeError

from . import core
from . import errors
from . import output

__all__ = [
    "__version__",
    "ByteSpan",
    "ClientHello",
    "Config",
    "DecodeError",
    "TLSRecord",
    "extract_sni",
    "parse_client_hello",
    "parse_record",
    "core",
    "errors",
    "output",
]
