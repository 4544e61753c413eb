"""
accessopt exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All accessopt-specific exceptions inherit from AccessOptError for easy catching.

Exceptions raised inside user objective or constraint functions are never
wrapped: they reach the caller exactly as the user code raised them.

Example:
    try:
        sol = solve(spec, "nelder-mead")
    except AccessOptError as e:
        print(f"Optimization setup failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class AccessOptError(Exception):
    """
    Base exception for all accessopt errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Specification Errors
# =============================================================================


class SpecificationError(AccessOptError, ValueError):
    """Raised when OptArgs/OptCons/OptProblemSpec are inconsistent."""

    pass


class MixedBoundsError(SpecificationError):
    """Raised when some OptArgs entries carry an interval and others do not."""

    def __init__(self, bounded: list[str], unbounded: list[str]) -> None:
        message = (
            f"OptArgs mixes bounded entries ({', '.join(bounded)}) "
            f"with unbounded entries ({', '.join(unbounded)})."
        )
        suggestion = "Give every entry an interval, or drop the intervals from all of them"
        super().__init__(message, suggestion, {"bounded": bounded, "unbounded": unbounded})


class ConstructionArityError(SpecificationError):
    """Raised when construction mode is used with a path that is not a single field."""

    def __init__(self, path: str, target: str) -> None:
        message = f"Path '{path}' does not address exactly one field of {target}."
        suggestion = "When x0 is a type, every OptArgs path must be a single field name like 'scale'"
        super().__init__(message, suggestion, {"path": path, "target": target})


class VectorLengthError(SpecificationError):
    """Raised when a raw vector length differs from the number of matched positions."""

    def __init__(self, expected: int | None, got: int, where: str = "") -> None:
        if expected is None:
            message = f"Raw vector has {got} values but {where or 'the paths'} match more positions."
        else:
            message = f"Raw vector has {got} values but {where or 'the paths'} match {expected} positions."
        suggestion = "Pass the vector produced by flatten() for the same seed and OptArgs"
        super().__init__(message, suggestion, {"expected": expected, "got": got})


class PathSyntaxError(SpecificationError):
    """Raised when a path expression cannot be parsed."""

    def __init__(self, expr: str, position: int) -> None:
        message = f"Cannot parse path expression {expr!r} at position {position}."
        suggestion = "Use attribute names, [index], [start:stop], [*], ['key'] or ** segments, e.g. 'comps[*].shift'"
        super().__init__(message, suggestion, {"expr": expr, "position": position})


# =============================================================================
# Path Errors
# =============================================================================


class PathResolutionError(AccessOptError, LookupError):
    """Raised when a path step does not resolve against an object."""

    def __init__(self, path: str, step: str, target: Any, reason: str | None = None) -> None:
        type_name = type(target).__name__
        message = f"Step '{step}' of path '{path}' does not resolve on {type_name}."
        if reason:
            message += f" {reason}"
        suggestion = "Check the path against the structure of the seed object"
        super().__init__(message, suggestion, {"path": path, "step": step, "type": type_name})


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(AccessOptError):
    """Raised when solver configuration is invalid or incomplete."""

    pass


class InvalidAlgorithmError(ConfigurationError):
    """Raised when an unknown algorithm is specified."""

    def __init__(self, algorithm: str, available: list[str] | None = None) -> None:
        available = available or []
        message = f"Unknown algorithm '{algorithm}'."
        suggestion = f"Available algorithms: {', '.join(available)}" if available else None
        super().__init__(message, suggestion, {"algorithm": algorithm, "available": available})


class SolverCapabilityError(ConfigurationError):
    """Raised when a problem needs something the chosen algorithm cannot handle."""

    def __init__(self, algorithm: str, feature: str, alternatives: list[str] | None = None) -> None:
        message = f"Algorithm '{algorithm}' {feature}."
        suggestion = f"Try one of: {', '.join(alternatives)}" if alternatives else None
        super().__init__(message, suggestion, {"algorithm": algorithm, "feature": feature})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "AccessOptError",
    # Specification
    "SpecificationError",
    "MixedBoundsError",
    "ConstructionArityError",
    "VectorLengthError",
    "PathSyntaxError",
    # Paths
    "PathResolutionError",
    # Configuration
    "ConfigurationError",
    "InvalidAlgorithmError",
    "SolverCapabilityError",
]
