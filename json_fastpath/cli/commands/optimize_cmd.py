"""Optimize command: drop integer-looking keys and write the result as JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from json_fastpath.cli.utils import console, load_document
from json_fastpath.encoder import dumps
from json_fastpath.optimizer import optimize as optimize_tree


def optimize(
    document: Annotated[
        Path,
        typer.Argument(
            help="JSON or YAML document to optimize",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON here instead of stdout"),
    ] = None,
    indent: Annotated[
        int | None,
        typer.Option("--indent", "-i", help="Indent the written JSON"),
    ] = None,
) -> None:
    """Remove integer-looking keys from every mapping of a document.

    Each removed key is logged as a warning.
    """
    try:
        text = dumps(optimize_tree(load_document(document)), space=indent)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Serialization Error:[/red] {e}")
        raise typer.Exit(1) from e

    if output is None:
        typer.echo(text)
        return

    try:
        output.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]File Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Wrote[/green] {output}")
