# src/storage_writer/cli.py
"""storage-writer Command Line Interface.

Entry point for the storage-writer CLI tool. The ``write`` command feeds
block diffs from a JSON file through the configured sink, which is how
operators backfill or test an output target without a running client.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from storage_writer import __version__
from storage_writer.contracts import H256, Address, Database, InvalidDatabaseError, SinkInitError
from storage_writer.core.config import load_settings
from storage_writer.core.logging import configure_logging

app = typer.Typer(
    name="storage-writer",
    help="Persist per-block storage diffs of watched accounts.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"storage-writer version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging (overrides the settings file).",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (overrides the settings file).",
    ),
) -> None:
    """storage-writer: persist storage diffs to CSV, Postgres or nowhere."""
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}


@app.command()
def version() -> None:
    """Print the package version."""
    typer.echo(f"storage-writer version {__version__}")


@app.command()
def databases() -> None:
    """List the supported storage writing databases."""
    for database in Database.all_types():
        typer.echo(database.as_str())


def _parse_block(raw: Any, index: int) -> tuple[H256, int, dict[Address, dict[H256, H256]]]:
    """Convert one JSON block object into typed diff arguments.

    Raises:
        ValueError: If the object is malformed.
        TypeError: If a hash, key or value is not a string.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"block #{index} must be an object, got {type(raw).__name__}")
    try:
        block_hash = H256.from_hex(raw["block_hash"])
        block_number = raw["block_number"]
        raw_diffs = raw["diffs"]
    except KeyError as e:
        raise ValueError(f"block #{index} is missing field {e.args[0]!r}") from None
    if type(block_number) is not int or block_number < 0:
        raise ValueError(f"block #{index} block_number must be a non-negative integer, got {block_number!r}")
    if not isinstance(raw_diffs, dict):
        raise ValueError(f"block #{index} diffs must be an object")

    diffs: dict[Address, dict[H256, H256]] = {}
    for account, slots in raw_diffs.items():
        if not isinstance(slots, dict):
            raise ValueError(f"block #{index} diffs for {account} must be an object")
        diffs[Address.from_hex(account)] = {H256.from_hex(k): H256.from_hex(v) for k, v in slots.items()}
    return block_hash, block_number, diffs


def load_diff_blocks(path: Path) -> list[tuple[H256, int, dict[Address, dict[H256, H256]]]]:
    """Read a JSON file holding one block object or a list of them.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or a block is malformed.
        TypeError: If a hash, key or value is not a JSON string.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    blocks = data if isinstance(data, list) else [data]
    return [_parse_block(raw, i) for i, raw in enumerate(blocks)]


@app.command()
def write(
    ctx: typer.Context,
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    diffs: str = typer.Option(
        ...,
        "--diffs",
        "-d",
        help="Path to JSON file with block diffs.",
    ),
    database: str | None = typer.Option(
        None,
        "--database",
        help="Override the configured database (csv, none, postgres).",
    ),
) -> None:
    """Write block storage diffs through the configured sink."""
    from storage_writer.factory import new

    settings_path = Path(settings).expanduser()
    try:
        config = load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    flags = ctx.obj or {}
    configure_logging(
        json_output=flags.get("json_logs") or config.logging.json_output,
        level="DEBUG" if flags.get("verbose") else config.logging.level,
    )

    try:
        selected = Database.parse(database) if database is not None else config.storage_writer.database
    except InvalidDatabaseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        blocks = load_diff_blocks(Path(diffs).expanduser())
    except (OSError, TypeError, ValueError) as e:
        typer.echo(f"Error reading diffs from {diffs}: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        writer = new(selected, config.storage_writer.watched_accounts, config)
    except SinkInitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    total = 0
    with writer:
        for block_hash, block_number, block_diffs in blocks:
            try:
                total += writer.write_storage_diffs(block_hash, block_number, block_diffs)
            except OSError as e:
                typer.echo(f"Error writing block {block_number}: {e}", err=True)
                raise typer.Exit(2) from None

    typer.echo(f"Wrote {total} storage record(s) from {len(blocks)} block(s) via {selected.as_str()}")
