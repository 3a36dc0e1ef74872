"""Entry point for running json-fastpath as a module: python -m json_fastpath."""

from __future__ import annotations


def main() -> None:
    from json_fastpath.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
