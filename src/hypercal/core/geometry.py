"""Geometric operations over parameter spaces.

These generate new candidates from an existing population: centroids,
homothetic transforms (reflection, contraction, expansion) and uniform
sampling. Every function returns a new ``ParameterSpace`` and never
mutates its arguments. Randomness is always injected by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

import numpy as np

from .errors import EmptyInputError, IncompatibleGeometryError
from .hypercube import ParameterSpace
from .logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class UniformSource(Protocol):
    """Uniform sampler over ``[low, high]``.

    ``numpy.random.Generator`` and ``random.Random`` both satisfy this.
    """

    def uniform(self, low: float, high: float) -> float: ...


def _as_points(points: Iterable[ParameterSpace], operation: str) -> list[ParameterSpace]:
    points = list(points)
    if not points:
        raise EmptyInputError(f"{operation} requires at least one point")
    return points


def _common_names(points: Sequence[ParameterSpace]) -> list[str]:
    """Names of the first point, after checking all points define the same set."""
    names = points[0].variable_names()
    expected = set(names)
    for i, p in enumerate(points[1:], start=1):
        other = set(p.variable_names())
        if other != expected:
            diff = sorted(expected.symmetric_difference(other))
            raise IncompatibleGeometryError(
                f"Point {i} has a different variable set; mismatched: {diff}",
                name=diff[0],
            )
    return names


def _check_same_bounds(points: Sequence[ParameterSpace], names: Sequence[str]) -> None:
    ref = points[0]
    for i, p in enumerate(points[1:], start=1):
        for name in names:
            if (p.get_min_value(name), p.get_max_value(name)) != (
                ref.get_min_value(name),
                ref.get_max_value(name),
            ):
                raise IncompatibleGeometryError(
                    f"Point {i} has bounds [{p.get_min_value(name)!r}, "
                    f"{p.get_max_value(name)!r}] for '{name}', expected "
                    f"[{ref.get_min_value(name)!r}, {ref.get_max_value(name)!r}]",
                    name=name,
                )


def _value_matrix(points: Sequence[ParameterSpace], names: Sequence[str]) -> np.ndarray:
    """Values as an (n_points, n_vars) array, columns in ``names`` order."""
    return np.array(
        [[p.get_value(name) for name in names] for p in points], dtype=np.float64
    ).reshape(len(points), len(names))


def _sample(rng: UniformSource, low: float, high: float) -> float:
    # Degenerate interval: no draw, so later variables see the same stream
    if low == high:
        return float(low)
    return float(rng.uniform(low, high))


def centroid(points: Iterable[ParameterSpace]) -> ParameterSpace[float]:
    """Arithmetic mean of the points' values.

    Args:
        points: Spaces sharing the same variables and the same bounds.

    Returns:
        New space with the common bounds and the per-variable mean value.

    Raises:
        EmptyInputError: If ``points`` is empty.
        IncompatibleGeometryError: On mismatched variables or bounds.
    """
    points = _as_points(points, "centroid")
    names = _common_names(points)
    _check_same_bounds(points, names)

    means = _value_matrix(points, names).mean(axis=0)
    ref = points[0]
    result: ParameterSpace[float] = ParameterSpace()
    for name, mean in zip(names, means):
        result.define(name, ref.get_min_value(name), ref.get_max_value(name), float(mean))

    if logger.is_enabled_for("DEBUG"):
        logger.debug("centroid", n_points=len(points), description=result.describe())
    return result


def homothetic_transform(
    base: ParameterSpace, point: ParameterSpace, factor: float
) -> ParameterSpace[float]:
    """Scale ``point`` relative to ``base`` by ``factor``.

    Per variable: ``base + factor * (point - base)``. ``factor=1`` gives
    ``point``, ``0`` gives ``base``, ``-1`` reflects ``point`` through
    ``base`` and ``0.5`` contracts halfway. Bounds are copied from
    ``point``; the result is not clamped.

    Raises:
        IncompatibleGeometryError: If ``base`` and ``point`` define
            different variables.
    """
    names = _common_names([point, base])
    factor = float(factor)
    result: ParameterSpace[float] = ParameterSpace()
    for name in names:
        b = float(base.get_value(name))
        p = float(point.get_value(name))
        # Convex-combination form is exact at factor 0 and 1
        value = (1.0 - factor) * b + factor * p
        result.define(name, point.get_min_value(name), point.get_max_value(name), value)

    if logger.is_enabled_for("DEBUG"):
        logger.debug("homothetic_transform", factor=factor, description=result.describe())
    return result


def generate_random_within(
    points: Iterable[ParameterSpace], rng: UniformSource
) -> ParameterSpace[float]:
    """Sample uniformly inside the box spanned by the points' values.

    The sampling interval of each variable is ``[min, max]`` of the input
    values, not of the declared bounds. The result keeps the declared
    bounds shared by the inputs.

    Raises:
        EmptyInputError: If ``points`` is empty.
        IncompatibleGeometryError: On mismatched variables or bounds.
    """
    points = _as_points(points, "generate_random_within")
    names = _common_names(points)
    _check_same_bounds(points, names)

    values = _value_matrix(points, names)
    lows = values.min(axis=0)
    highs = values.max(axis=0)
    ref = points[0]
    result: ParameterSpace[float] = ParameterSpace()
    for name, lo, hi in zip(names, lows, highs):
        result.define(
            name, ref.get_min_value(name), ref.get_max_value(name), _sample(rng, lo, hi)
        )

    if logger.is_enabled_for("DEBUG"):
        logger.debug(
            "generate_random_within", n_points=len(points), description=result.describe()
        )
    return result


def generate_random(point: ParameterSpace, rng: UniformSource) -> ParameterSpace[float]:
    """Sample uniformly inside ``point``'s declared bounds."""
    result: ParameterSpace[float] = ParameterSpace()
    for name in point.variable_names():
        lo = point.get_min_value(name)
        hi = point.get_max_value(name)
        result.define(name, lo, hi, _sample(rng, lo, hi))

    if logger.is_enabled_for("DEBUG"):
        logger.debug("generate_random", description=result.describe())
    return result
