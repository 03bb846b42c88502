"""Output format handlers for extraction results."""

from __future__ import annotations

import csv
import json
from typing import Any, Iterable, TextIO

RESULT_FIELDS = ["path", "server_name", "error"]


def to_json_stream(rows: Iterable[dict[str, Any]], file: TextIO) -> None:
    """Stream result rows as JSON Lines to a file object.

    Args:
        rows: Result dictionaries.
        file: File object to write to.
    """
    for row in rows:
        file.write(json.dumps(_serialize_row(row)) + "\n")


def to_csv_stream(rows: Iterable[dict[str, Any]], file: TextIO) -> None:
    """Stream result rows as CSV (with header) to a file object."""
    writer = csv.DictWriter(file, fieldnames=RESULT_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: "" if v is None else v for k, v in _serialize_row(row).items()})


def to_text_stream(rows: Iterable[dict[str, Any]], file: TextIO) -> None:
    """Write one ``path<TAB>server_name`` line per row.

    Rows without a server name print ``-``; failures append the error code.
    """
    for row in rows:
        line = f"{row['path']}\t{row.get('server_name') or '-'}"
        if row.get("error"):
            line += f"\t[{row['error']}]"
        file.write(line + "\n")


def write_rows(rows: Iterable[dict[str, Any]], file: TextIO, output_format: str) -> None:
    """Write rows in the named format ("text", "json", or "csv")."""
    writers = {
        "text": to_text_stream,
        "json": to_json_stream,
        "csv": to_csv_stream,
    }
    try:
        writer = writers[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}") from None
    writer(rows, file)


def _serialize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Keep the known fields, in order, with paths rendered as strings."""
    return {field: (str(row[field]) if field == "path" else row.get(field)) for field in RESULT_FIELDS}
