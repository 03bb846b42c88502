"""Loading captured ClientHello bytes from disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# Hex dumps as pasted from Wireshark, xxd -p or C/Rust array literals.
_HEX_TEXT = re.compile(rb"(?:\s|,|0[xX]|[0-9a-fA-F])*")
_HEX_NOISE = re.compile(rb"\s|,|0[xX](?=[0-9a-fA-F])")


def decode_hex(text: bytes) -> bytes:
    """Decode a hex dump, ignoring whitespace, commas and ``0x`` prefixes.

    Raises:
        ValueError: If what remains is not an even number of hex digits.
    """
    return bytes.fromhex(_HEX_NOISE.sub(b"", text).decode("ascii"))


def looks_like_hex(content: bytes) -> bool:
    """Check whether ``content`` is a non-empty hex dump."""
    return bool(content.strip()) and _HEX_TEXT.fullmatch(content) is not None


def load_input(path: str | Path, input_format: str = "auto") -> bytes:
    """Read one capture file.

    Args:
        path: File to read.
        input_format: "raw", "hex", or "auto".

    Returns:
        The record bytes.

    Raises:
        ValueError: If a hex file is malformed or the format is unknown.
    """
    path = Path(path)
    content = path.read_bytes()

    if input_format == "raw":
        return content
    if input_format == "hex":
        return decode_hex(content)
    if input_format == "auto":
        if looks_like_hex(content):
            try:
                return decode_hex(content)
            except ValueError:
                logger.debug(f"{path} looks like hex but does not decode, reading raw")
        return content
    raise ValueError(f"Unknown input format: {input_format}")


def collect_inputs(paths: list[str | Path]) -> list[Path]:
    """Expand directories to their regular files, sorted by name."""
    files: list[Path] = []
    for item in paths:
        item = Path(item)
        if item.is_dir():
            files.extend(sorted(p for p in item.iterdir() if p.is_file()))
        else:
            files.append(item)
    return files
