"""Centralized logging configuration for json-fastpath using Loguru.

Examples
--------
Basic usage:

>>> from json_fastpath.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Validation started", nodes=12)

Configure logging globally::

    from json_fastpath.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

from __future__ import annotations

import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Configure global logging for json-fastpath.

    Idempotent: calling it again with the same settings neither duplicates
    handlers nor changes anything. Apart from Loguru's default handler, only
    handlers added here are replaced, so sinks installed by the application or
    by tests are left alone.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": plain text, no colors
        - "json": one serialized JSON record per line
        - "structured": Loguru native format with colors on a TTY
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file to write JSON records to, in addition to stderr
    use_color : bool, default=True
        Use ANSI color codes in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Reconfigure even if the settings did not change
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Loguru ships with a stderr handler (id 0); ours replaces it
    for handler_id in [0, *_HANDLER_IDS]:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=False,
        )
        _HANDLER_IDS.append(logger.add(sink=rich_handler, level=level, format="{message}"))

    elif format == "json":
        _HANDLER_IDS.append(logger.add(sink=sys.stderr, level=level, serialize=True))

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        _HANDLER_IDS.append(
            logger.add(
                sink=sys.stderr,
                level=level,
                format=structured_format,
                colorize=colorize,
            )
        )

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        _HANDLER_IDS.append(
            logger.add(
                sink=sys.stderr,
                level=level,
                format=f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}",
                colorize=False,
            )
        )

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        _HANDLER_IDS.append(logger.add(sink=output_path, level=level, serialize=True))

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> Logger:
    """Get a logger bound with the module name (cached).

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module

    Returns
    -------
    loguru.Logger
        Logger instance bound with ``module=name``
    """
    return logger.bind(module=name)


def reset_logging() -> None:
    """Remove the handlers installed by ``configure_logging``."""
    global _CURRENT_CONFIG
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()
    _CURRENT_CONFIG = None
