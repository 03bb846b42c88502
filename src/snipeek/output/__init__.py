"""Output writers for SNI extraction results."""

from __future__ import annotations

from .formats import to_csv_stream, to_json_stream, to_text_stream, write_rows

__all__ = [
    "to_csv_stream",
    "to_json_stream",
    "to_text_stream",
    "write_rows",
]
