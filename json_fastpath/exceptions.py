"""Exception hierarchy for json-fastpath.

Structural findings are never raised; they are reported as warnings on a
``ValidationResult``. The exceptions below cover invalid arguments, invalid
configuration and trees the traversal refuses to walk. All of them inherit
from ``FastPathError`` for easy exception handling.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class FastPathError(Exception):
    """Base exception for all json-fastpath errors."""

    pass


# ============================================================================
# Configuration & Argument Errors
# ============================================================================


class ConfigurationError(FastPathError):
    """Raised when configuration is invalid or cannot be loaded.

    Examples
    --------
    Example usage::

        raise ConfigurationError("max_depth", "must be a positive integer")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the configuration section or key
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(FastPathError):
    """Raised when an argument fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("iterations", "must be a positive integer", value=-1)
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the argument that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Traversal Errors
# ============================================================================


class TraversalError(FastPathError):
    """Raised when the validator cannot walk a value tree."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot traverse value at {path}: {reason}")
        self.path = path
        self.reason = reason


class CycleDetectedError(TraversalError):
    """Raised when a node contains itself, directly or through descendants.

    Examples
    --------
    Example usage::

        data = {"a": 1}
        data["self"] = data
        validator.validate(data)  # raises CycleDetectedError at root.self
    """

    def __init__(self, path: str) -> None:
        super().__init__(path, "reference cycle detected")


class DepthExceededError(TraversalError):
    """Raised when nesting goes deeper than the configured ``max_depth``."""

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(path, f"nesting deeper than max_depth={max_depth}")
        self.max_depth = max_depth
