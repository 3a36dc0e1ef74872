"""Benchmark command for the json-fastpath CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from json_fastpath.cli.utils import (
    check_output_format,
    console,
    load_document,
    print_json,
    validator_from_context,
)
from json_fastpath.exceptions import TraversalError, ValidationError
from json_fastpath.validator import DEFAULT_ITERATIONS


def bench(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(
            help="JSON or YAML document to serialize repeatedly",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    iterations: Annotated[
        int,
        typer.Option("--iterations", "-n", help="Number of serializations to time"),
    ] = DEFAULT_ITERATIONS,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
) -> None:
    """Time repeated compact serialization of a document."""
    check_output_format(output_format)
    tree = load_document(document)

    try:
        result = validator_from_context(ctx).benchmark(tree, iterations)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e
    except TraversalError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    except (TypeError, ValueError) as e:
        console.print(f"[red]Serialization Error:[/red] {e}")
        raise typer.Exit(1) from e

    if output_format == "json":
        print_json(result.to_dict())
        return

    table = Table(show_header=False, border_style="dim")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Iterations", str(result.iterations))
    table.add_row("Total time", f"{result.total_time:.3f} ms")
    table.add_row("Average time", f"{result.average_time:.6f} ms")
    table.add_row("Ops/second", f"{result.ops_per_second:,.0f}")

    console.print()
    console.print(f"[bold]{document}[/bold]")
    console.print(table)
    console.print(result.validation.summary, markup=False)
    console.print()
