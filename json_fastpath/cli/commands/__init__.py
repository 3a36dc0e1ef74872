"""CLI command modules."""

from . import bench_cmd, check_cmd, optimize_cmd

__all__ = ["bench_cmd", "check_cmd", "optimize_cmd"]
