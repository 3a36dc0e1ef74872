"""json-fastpath.

Validate value trees for the JSON serializer fast path, strip
integer-looking keys, serialize with diagnostics and benchmark serialization.
"""

try:
    from importlib.metadata import version

    __version__ = version("json-fastpath")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from json_fastpath.api import benchmark, default_validator, optimize, stringify, validate
from json_fastpath.config import FastPathConfig, LoggingConfig, load_config
from json_fastpath.encoder import SKIP, dumps
from json_fastpath.exceptions import (
    ConfigurationError,
    CycleDetectedError,
    DepthExceededError,
    FastPathError,
    TraversalError,
    ValidationError,
)
from json_fastpath.models import (
    BenchmarkResult,
    FastPathWarning,
    Impact,
    StringifyResult,
    ValidationResult,
    WarningType,
)
from json_fastpath.validator import FastPathValidator

__all__ = [
    "SKIP",
    "BenchmarkResult",
    "ConfigurationError",
    "CycleDetectedError",
    "DepthExceededError",
    "FastPathConfig",
    "FastPathError",
    "FastPathValidator",
    "FastPathWarning",
    "Impact",
    "LoggingConfig",
    "StringifyResult",
    "TraversalError",
    "ValidationError",
    "ValidationResult",
    "WarningType",
    "__version__",
    "benchmark",
    "default_validator",
    "dumps",
    "load_config",
    "optimize",
    "stringify",
    "validate",
]
