"""Server name validation."""

from __future__ import annotations

import string

from ..errors import IllegalChar, NotUtf8, TooLong
from .span import ByteSpan

MAX_HOSTNAME_LEN = 255

# ASCII base-36 digits in either case, plus the label punctuation seen in the wild.
HOSTNAME_CHARS = frozenset(string.ascii_letters + string.digits + ".-_")


def parse_server_name(value: ByteSpan) -> str:
    """Decode and validate a host_name entry from the SNI extension.

    Args:
        value: Span holding the raw name bytes.

    Returns:
        The hostname as text.

    Raises:
        NotUtf8: If the bytes are not valid UTF-8.
        TooLong: If the name is longer than 255 bytes.
        IllegalChar: If the name contains anything outside ``[0-9A-Za-z._-]``.
    """
    try:
        name = value.tobytes().decode("utf-8")
    except UnicodeDecodeError:
        raise NotUtf8() from None
    if len(value) > MAX_HOSTNAME_LEN:
        raise TooLong()
    if not HOSTNAME_CHARS.issuperset(name):
        raise IllegalChar()
    return name


def is_valid_hostname(name: str) -> bool:
    """Check ``name`` against the same rules as :func:`parse_server_name`."""
    # Every allowed character is ASCII, so the character count is the byte count.
    return HOSTNAME_CHARS.issuperset(name) and len(name) <= MAX_HOSTNAME_LEN
