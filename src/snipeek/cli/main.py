"""Command-line interface for snipeek."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Iterator

import click
from click.core import ParameterSource

from .. import __version__
from ..core.client_hello import parse_client_hello
from ..core.config import INPUT_FORMATS, OUTPUT_FORMATS, Config
from ..core.extensions import iter_extensions
from ..core.record import TLS_HANDSHAKE, parse_record
from ..errors import DecodeError
from ..loader import collect_inputs, load_input
from ..output.formats import write_rows
from ..progress import ProgressTask, create_progress

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _load(path: Path, input_format: str) -> bytes:
    try:
        return load_input(path, input_format)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")


def _extract_rows(files: list[Path], config: Config, failures: list[Path]) -> Iterator[dict[str, Any]]:
    """Decode each file into a result row, recording failed paths."""
    for path in files:
        data = _load(path, config.input_format)
        try:
            server_name = parse_client_hello(data).server_name
            error = ""
        except DecodeError as e:
            logger.debug(f"{path}: {e}")
            server_name = None
            error = e.code
            failures.append(path)
        yield {
            "path": path,
            "server_name": config.resolve_server_name(server_name),
            "error": error,
        }


def _given(param: str) -> bool:
    """Check whether ``param`` was set on the command line rather than defaulted."""
    return click.get_current_context().get_parameter_source(param) is not ParameterSource.DEFAULT


@click.group()
@click.version_option(version=__version__, prog_name="snipeek")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """snipeek: read the SNI hostname out of a TLS ClientHello.

    Inputs are files holding the first TLS record a client sent, either as
    raw bytes or as a hex dump.
    """
    setup_logging(verbose)


@cli.command()
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: text).",
)
@click.option(
    "-i",
    "--input-format",
    type=click.Choice(INPUT_FORMATS),
    default=None,
    help="How input files are encoded (default: auto).",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True),
    help="Configuration file (JSON or YAML).",
)
@click.option(
    "--default",
    "default_server_name",
    default=None,
    help="Hostname to report when a file has no usable SNI.",
)
@click.option(
    "--strict/--no-strict",
    default=False,
    help="Exit with an error if any input fails to decode.",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    help="Show progress bar when writing to a file.",
)
def sni(
    inputs: tuple[str, ...],
    output: str | None,
    output_format: str | None,
    input_format: str | None,
    config_file: str | None,
    default_server_name: str | None,
    strict: bool,
    progress: bool,
) -> None:
    """Extract the SNI hostname from one or more capture files.

    Directories are expanded to the files they contain.

    Examples:

        snipeek sni client_hello.bin

        snipeek sni captures/ -f json -o names.jsonl

        snipeek sni hello.hex --default fallback.internal --strict
    """
    if config_file:
        try:
            config = Config.from_file(config_file)
            click.echo(f"Loaded config from: {config_file}", err=True)
        except Exception as e:
            raise click.ClickException(f"Failed to load config file: {e}")
    else:
        config = Config()

    # CLI options override config file
    overrides = {
        "input_format": input_format,
        "output_format": output_format,
        "default_server_name": default_server_name,
        "strict": strict if _given("strict") else None,
    }
    try:
        config = Config.from_dict({**config.to_dict(), **{k: v for k, v in overrides.items() if v is not None}})
    except ValueError as e:
        raise click.BadParameter(str(e))

    files = collect_inputs(list(inputs))
    if not files:
        raise click.ClickException("No input files found")

    failures: list[Path] = []
    rows = _extract_rows(files, config, failures)

    if output:
        with open(output, "w", encoding="utf-8", newline="") as f:
            if progress and len(files) > 1:
                with create_progress("Extracting SNI", total=len(files)) as task:
                    write_rows(_tracked(rows, task), f, config.output_format)
            else:
                write_rows(rows, f, config.output_format)
        click.echo(f"Wrote {len(files)} result(s) to: {output}", err=True)
    else:
        write_rows(rows, sys.stdout, config.output_format)

    if failures:
        logger.info(f"{len(failures)} of {len(files)} input(s) could not be decoded")
        if config.strict:
            raise click.ClickException(f"{len(failures)} input(s) failed to decode")


def _tracked(rows: Iterator[dict[str, Any]], task: ProgressTask) -> Iterator[dict[str, Any]]:
    for row in rows:
        yield row
        task.update()


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-i",
    "--input-format",
    type=click.Choice(INPUT_FORMATS),
    default="auto",
    help="How the input file is encoded.",
)
def record(input_path: str, input_format: str) -> None:
    """Show the TLS record header and ClientHello layout of a capture file."""
    data = _load(Path(input_path), input_format)

    try:
        rec = parse_record(data)
    except DecodeError as e:
        raise click.ClickException(f"Not a TLS record: {e}")

    click.echo(f"Content type:   {rec.content_type} ({rec.content_type_name})")
    click.echo(f"Version:        {rec.version_major}.{rec.version_minor} (0x{rec.version:04x})")
    click.echo(f"Fragment:       {rec.length} bytes")
    if len(data) > rec.fragment.stop:
        click.echo(f"Trailing bytes: {len(data) - rec.fragment.stop}")

    if rec.content_type != TLS_HANDSHAKE:
        return

    try:
        hello = parse_client_hello(data)
    except DecodeError as e:
        click.echo(f"ClientHello:    not decoded ({e})")
        return

    major, minor = hello.client_version
    click.echo(f"Client version: {major}.{minor}")
    types = [f"0x{ext.type_code:04x}" for ext in iter_extensions(hello.extensions)]
    click.echo(f"Extensions:     {', '.join(types) if types else '(none)'}")
    click.echo(f"Server name:    {hello.server_name or '(none)'}")


if __name__ == "__main__":
    cli()
