"""Error taxonomy for parameter spaces, geometry and scoring.

Every error derives from ``HypercalError`` and from the builtin that a
generic caller would expect (``ValueError``, ``KeyError``, ...), and
carries the variable name or index that triggered it.
"""

from __future__ import annotations

from typing import Any


class HypercalError(Exception):
    """Base class for all hypercal errors."""


class DomainError(HypercalError, ValueError):
    """Raised when a variable would end up with min > max."""

    def __init__(self, name: str, min_value: Any, max_value: Any) -> None:
        self.name = name
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(
            f"Invalid bounds for variable '{name}': min {min_value!r} > max {max_value!r}"
        )


class UnknownVariableError(HypercalError, KeyError):
    """Raised when accessing a variable that is not defined."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown variable '{self.name}'"


class IncompatibleGeometryError(HypercalError, ValueError):
    """Raised when geometric operands have mismatched variables or bounds."""

    def __init__(self, message: str, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class IncompatibleObjectiveError(HypercalError, ValueError):
    """Raised when comparing scores of different objectives."""

    def __init__(self, name: str, other: str) -> None:
        self.name = name
        self.other = other
        super().__init__(f"Cannot compare objective '{name}' with '{other}'")


class EmptyInputError(HypercalError, ValueError):
    """Raised when a geometric operation receives no points."""


class IncompatibleSystemError(HypercalError, ValueError):
    """Raised when a parameter space cannot be applied to a target system."""

    def __init__(self, message: str, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class IndexOutOfRangeError(HypercalError, IndexError):
    """Raised when an objective index is outside [0, count)."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Objective index {index} out of range [0, {count})")


class EvaluatorNotCloneableError(HypercalError, TypeError):
    """Raised when a single-threaded evaluator is requested for a worker."""
