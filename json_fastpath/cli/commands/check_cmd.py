"""Fast path check command for the json-fastpath CLI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.markup import escape
from rich.table import Table

from json_fastpath.cli.utils import (
    check_output_format,
    console,
    load_document,
    print_json,
    validator_from_context,
)
from json_fastpath.exceptions import TraversalError
from json_fastpath.models import IMPACT_ORDER

if TYPE_CHECKING:
    from json_fastpath.models import FastPathWarning, ValidationResult

_IMPACT_RANK = {impact: rank for rank, impact in enumerate(IMPACT_ORDER)}
_IMPACT_STYLE = {"high": "red", "medium": "yellow", "low": "blue"}


def check(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(
            help="JSON or YAML document to check",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    indent: Annotated[
        int | None,
        typer.Option("--indent", "-i", help="Indentation you intend to serialize with"),
    ] = None,
    min_impact: Annotated[
        str,
        typer.Option("--min-impact", "-m", help="Lowest impact to report (high, medium, low)"),
    ] = "low",
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
) -> None:
    """Check whether a document would be serialized on the fast path.

    Exits with status 1 when a high impact issue blocks the fast path.

    Examples
    --------
    json-fastpath check payload.json
    json-fastpath check payload.yaml --min-impact medium
    json-fastpath check payload.json --indent 2 --format json
    """
    if min_impact not in _IMPACT_RANK:
        console.print(
            f"[red]Invalid impact '{min_impact}'.[/red] Choose from: {', '.join(IMPACT_ORDER)}"
        )
        raise typer.Exit(2)
    check_output_format(output_format)

    tree = load_document(document)
    try:
        result = validator_from_context(ctx).validate(tree, space=indent)
    except TraversalError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    max_rank = _IMPACT_RANK[min_impact]
    shown = [w for w in result.warnings if _IMPACT_RANK[w.impact] <= max_rank]

    if output_format == "json":
        data = result.to_dict()
        data["warnings"] = [w.to_dict() for w in shown]
        print_json(data)
    else:
        _print_text(document, result, shown)

    if not result.can_use_fast_path:
        raise typer.Exit(1)


def _print_text(document: Path, result: ValidationResult, shown: list[FastPathWarning]) -> None:
    console.print()
    if result.is_optimized:
        console.print(f"[green]Fast path ready:[/green] {document}")
        console.print()
        return

    counts = result.counts()
    console.print(f"[bold]{document}[/bold]")
    console.print(
        f"[red]{counts['high']} high[/red]  "
        f"[yellow]{counts['medium']} medium[/yellow]  "
        f"[blue]{counts['low']} low[/blue]"
    )
    console.print(result.summary, markup=False)
    console.print()

    if not shown:
        return

    table = Table(show_header=True, border_style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Impact", width=8)
    table.add_column("Path", style="green")
    table.add_column("Message")
    table.add_column("Suggestion", style="dim")

    for warning in shown:
        style = _IMPACT_STYLE[warning.impact]
        table.add_row(
            warning.type,
            f"[{style}]{warning.impact}[/{style}]",
            escape(warning.path or ""),
            escape(warning.message),
            warning.suggestion,
        )

    console.print(table)
    console.print()
