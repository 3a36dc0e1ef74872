"""CLI helper utilities for json-fastpath commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson
import typer
import yaml
from rich.console import Console

from json_fastpath.config import FastPathConfig
from json_fastpath.validator import FastPathValidator

console = Console()

OUTPUT_FORMATS = ("text", "json")


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document, exiting with status 1 on failure.

    YAML is used for ``.yaml``/``.yml`` files, JSON for everything else.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        console.print(f"[red]File Error:[/red] {e}")
        raise typer.Exit(1) from e

    if path.suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            console.print(f"[red]YAML Syntax Error:[/red] {e}")
            raise typer.Exit(1) from e

    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        console.print(f"[red]JSON Syntax Error:[/red] {e}")
        raise typer.Exit(1) from e


def validator_from_context(ctx: typer.Context) -> FastPathValidator:
    """Build a validator from the configuration stored by the main callback."""
    config = (ctx.obj or {}).get("config") or FastPathConfig()
    return FastPathValidator(config=config)


def check_output_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        console.print(
            f"[red]Invalid format '{output_format}'.[/red] Choose from: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(2)


def print_json(data: Any) -> None:
    """Print ``data`` as indented JSON without rich markup or wrapping."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
