"""json-fastpath CLI - Main entrypoint."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from json_fastpath import __version__
from json_fastpath.cli.commands import bench_cmd, check_cmd, optimize_cmd
from json_fastpath.config import load_config
from json_fastpath.exceptions import ConfigurationError
from json_fastpath.logging import configure_logging

app = typer.Typer(
    name="json-fastpath",
    help="Check JSON documents against the serializer fast path.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command(name="check")(check_cmd.check)
app.command(name="optimize")(optimize_cmd.optimize)
app.command(name="bench")(bench_cmd.bench)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]json-fastpath[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (TOML or YAML)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """json-fastpath CLI.

    Global flags are parsed here; the loaded configuration is stored on
    ``ctx.obj`` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e

    level = config.logging.level
    if verbose:
        level = "DEBUG"
    elif log_level:
        level = log_level.upper()
        if level == "WARN":
            level = "WARNING"

    configure_logging(
        level=level,  # type: ignore[arg-type]
        format=config.logging.format,
        output_file=config.logging.output_file,
        use_color=config.logging.use_color,
        include_timestamp=config.logging.include_timestamp,
    )

    ctx.obj.update({"config": config, "log_level": level})


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
