"""Bounded parameter spaces (hypercubes).

A ``ParameterSpace`` is an ordered set of named variables, each carrying a
``(min, max, value)`` triple. It is the candidate configuration handed to
evaluators and transformed by the geometry operations.

Invariants:
    - ``min <= max`` for every variable, enforced on every bound update.
    - ``value`` is NOT forced into ``[min, max]``: reflection and expansion
      moves may probe outside the box. ``apply`` checks it instead.
    - Definition order is preserved and drives iteration.

A space is owned by whoever holds it. ``clone`` returns a copy sharing no
mutable state, which is what lets concurrent workers evaluate without locks.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Generic, Protocol, TypeVar, runtime_checkable

import numpy as np

from .constants import ASSIGNMENT_TOKEN, DESCRIPTION_DELIMITER
from .errors import (
    DomainError,
    IncompatibleGeometryError,
    IncompatibleSystemError,
    UnknownVariableError,
)
from .logging import get_logger

T = TypeVar("T", int, float)

logger = get_logger(__name__)


@runtime_checkable
class ParameterSystem(Protocol):
    """Anything that accepts named parameter bindings, usually a model."""

    def has_parameter(self, name: str) -> bool: ...

    def set_parameter(self, name: str, value: float) -> None: ...


class MappingSystem:
    """Dict-backed ``ParameterSystem``.

    Only names present at construction are accepted, mirroring a model
    that exposes a fixed set of parameters.
    """

    def __init__(self, parameters: Mapping[str, float]) -> None:
        self._parameters = dict(parameters)

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def set_parameter(self, name: str, value: float) -> None:
        if name not in self._parameters:
            raise KeyError(name)
        self._parameters[name] = value

    def __getitem__(self, name: str) -> float:
        return self._parameters[name]

    @property
    def parameters(self) -> dict[str, float]:
        return dict(self._parameters)


@dataclass
class Variable(Generic[T]):
    """Bounds and current value of one variable."""

    name: str
    min_value: T
    max_value: T
    value: T

    @property
    def is_within_bounds(self) -> bool:
        return self.min_value <= self.value <= self.max_value


def format_value(value: float) -> str:
    """Render a number for ``describe``: ``5.0 -> "5"``, ``0.25 -> "0.25"``."""
    if isinstance(value, numbers.Integral):
        return str(int(value))
    v = float(value)
    if v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


def _check_bounds(name: str, min_value: float, max_value: float) -> None:
    if not min_value <= max_value:
        raise DomainError(name, min_value, max_value)


class ParameterSpace(Generic[T]):
    """Ordered, named, bounded set of numeric variables."""

    def __init__(self) -> None:
        self._variables: dict[str, Variable[T]] = {}

    @classmethod
    def from_bounds(
        cls,
        names: Sequence[str],
        xl: Sequence[float] | np.ndarray,
        xu: Sequence[float] | np.ndarray,
        values: Sequence[float] | np.ndarray | None = None,
    ) -> ParameterSpace[float]:
        """Build a space from parallel name/bound arrays.

        Values default to the midpoint of the bounds.
        """
        xl = np.asarray(xl, dtype=np.float64)
        xu = np.asarray(xu, dtype=np.float64)
        x = (xl + xu) / 2 if values is None else np.asarray(values, dtype=np.float64)
        if not (len(names) == len(xl) == len(xu) == len(x)):
            raise IncompatibleGeometryError(
                f"Length mismatch: {len(names)} names, {len(xl)} lower, "
                f"{len(xu)} upper, {len(x)} values"
            )
        space: ParameterSpace[float] = cls()
        for name, lo, hi, v in zip(names, xl, xu, x):
            space.define(name, float(lo), float(hi), float(v))
        return space

    # -- structure --------------------------------------------------------

    def variable_names(self) -> list[str]:
        """Names in definition order."""
        return list(self._variables)

    def dimensions(self) -> int:
        return len(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._variables))

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def variables(self) -> list[Variable[T]]:
        """Copies of the variable records, in definition order."""
        return [replace(v) for v in self._variables.values()]

    def _get(self, name: str) -> Variable[T]:
        try:
            return self._variables[name]
        except KeyError:
            raise UnknownVariableError(name) from None

    # -- definition and access -------------------------------------------

    def define(self, name: str, min_value: T, max_value: T, value: T) -> None:
        """Insert or overwrite a variable.

        Redefining an existing name keeps its position in the definition order.

        Raises:
            DomainError: If ``min_value > max_value`` or either bound is NaN.
        """
        _check_bounds(name, min_value, max_value)
        self._variables[name] = Variable(name, min_value, max_value, value)

    def get_value(self, name: str) -> T:
        return self._get(name).value

    def get_min_value(self, name: str) -> T:
        return self._get(name).min_value

    def get_max_value(self, name: str) -> T:
        return self._get(name).max_value

    def set_value(self, name: str, value: T) -> None:
        """Overwrite a value. Bounds are deliberately not enforced here."""
        self._get(name).value = value

    def set_min_value(self, name: str, min_value: T) -> None:
        var = self._get(name)
        _check_bounds(name, min_value, var.max_value)
        var.min_value = min_value

    def set_max_value(self, name: str, max_value: T) -> None:
        var = self._get(name)
        _check_bounds(name, var.min_value, max_value)
        var.max_value = max_value

    def set_min_max_value(self, name: str, min_value: T, max_value: T, value: T) -> None:
        """Replace the full triple of an already defined variable."""
        var = self._get(name)
        _check_bounds(name, min_value, max_value)
        var.min_value = min_value
        var.max_value = max_value
        var.value = value

    # -- bounds helpers ---------------------------------------------------

    def out_of_bounds(self) -> list[str]:
        """Names whose current value lies outside ``[min, max]``."""
        return [v.name for v in self._variables.values() if not v.is_within_bounds]

    def is_within_bounds(self) -> bool:
        return not self.out_of_bounds()

    def clamp(self) -> ParameterSpace[T]:
        """Return a clone with every value projected onto its bounds."""
        result = self.clone()
        for var in result._variables.values():
            var.value = min(max(var.value, var.min_value), var.max_value)
        return result

    # -- array views -------------------------------------------------------

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(xl, xu)`` bound arrays in definition order."""
        xl = np.array([v.min_value for v in self._variables.values()], dtype=np.float64)
        xu = np.array([v.max_value for v in self._variables.values()], dtype=np.float64)
        return xl, xu

    def values(self) -> np.ndarray:
        """Current values as a flat array in definition order."""
        return np.array([v.value for v in self._variables.values()], dtype=np.float64)

    def with_values(self, x: Sequence[float] | np.ndarray) -> ParameterSpace[float]:
        """Return a clone carrying the values in ``x`` (definition order)."""
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (len(self._variables),):
            raise IncompatibleGeometryError(
                f"Expected {len(self._variables)} values, got shape {x.shape}"
            )
        result = self.clone()
        for var, v in zip(result._variables.values(), x):
            var.value = float(v)
        return result

    def as_dict(self) -> dict[str, T]:
        """Ordered ``{name: value}`` mapping."""
        return {name: var.value for name, var in self._variables.items()}

    # -- configuration contract -------------------------------------------

    def describe(self) -> str:
        """Deterministic ``name=value`` listing sorted by name, ``;``-delimited.

        Example: ``"x=5;y=0"``. Meant for logs and test comparison, not
        for round-tripping.
        """
        return DESCRIPTION_DELIMITER.join(
            f"{name}{ASSIGNMENT_TOKEN}{format_value(self._variables[name].value)}"
            for name in sorted(self._variables)
        )

    def apply(self, system: ParameterSystem) -> None:
        """Bind every current value onto ``system``.

        All checks run before the first binding is written, so a failure
        leaves ``system`` untouched.

        Raises:
            IncompatibleSystemError: If ``system`` does not accept named
                bindings, lacks one of the variables, or a value lies
                outside its declared bounds.
        """
        if not isinstance(system, ParameterSystem):
            raise IncompatibleSystemError(
                f"{type(system).__name__} does not accept named parameter bindings"
            )
        for var in self._variables.values():
            if not system.has_parameter(var.name):
                raise IncompatibleSystemError(
                    f"Target system has no parameter '{var.name}'", name=var.name
                )
            if not var.is_within_bounds:
                raise IncompatibleSystemError(
                    f"Value {var.value!r} of '{var.name}' outside "
                    f"[{var.min_value!r}, {var.max_value!r}]",
                    name=var.name,
                )
        for var in self._variables.values():
            system.set_parameter(var.name, var.value)
        if logger.is_enabled_for("DEBUG"):
            logger.debug("applied configuration", description=self.describe())

    def clone(self) -> ParameterSpace[T]:
        """Independent copy: mutating either side never affects the other."""
        result: ParameterSpace[T] = type(self)()
        result._variables = {name: replace(var) for name, var in self._variables.items()}
        return result

    def __copy__(self) -> ParameterSpace[T]:
        return self.clone()

    def __deepcopy__(self, memo: dict) -> ParameterSpace[T]:
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSpace):
            return NotImplemented
        return list(self._variables.values()) == list(other._variables.values())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{v.name}={v.value!r} [{v.min_value!r}, {v.max_value!r}]"
            for v in self._variables.values()
        )
        return f"ParameterSpace({inner})"
