#!/usr/bin/env python3
"""Entry point for the CLI when run as python -m json_fastpath.cli."""

if __name__ == "__main__":
    from json_fastpath.cli.main import main

    main()
