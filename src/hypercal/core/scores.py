"""Objective scores and fitness-assigned scores.

``ObjectiveScoreSet`` is what an evaluator returns for one configuration;
``FitnessAssignedScore`` pairs it with a scalar fitness for ranking.
Both are immutable once built. A score set references the configuration
that produced it and never copies it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .constants import SCORE_TEXT_SEPARATOR
from .errors import IncompatibleObjectiveError, IndexOutOfRangeError
from .hypercube import ParameterSpace, format_value


@dataclass(frozen=True)
class ObjectiveScore:
    """One named objective value.

    Attributes:
        name: Objective measure, typically a bivariate statistic (e.g. "NSE").
        value: Raw value; never pre-negated.
        maximise: True if higher is better.
    """

    name: str
    value: Any
    maximise: bool = False

    @property
    def text(self) -> str:
        return f"{self.name}{SCORE_TEXT_SEPARATOR}{format_value(self.value)}"

    def get_text(self) -> str:
        return self.text

    def is_better_than(self, other: ObjectiveScore) -> bool:
        """Strict comparison honouring the maximise flag."""
        if other.name != self.name or other.maximise != self.maximise:
            raise IncompatibleObjectiveError(self.name, other.name)
        if self.maximise:
            return self.value > other.value
        return self.value < other.value

    def minimisation_value(self) -> float:
        """Value under the minimise-everything convention."""
        return -float(self.value) if self.maximise else float(self.value)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ObjectiveScoreSet:
    """Ordered objective scores for one evaluated configuration."""

    scores: tuple[ObjectiveScore, ...]
    system_configuration: ParameterSpace | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable; stored as a tuple so the set stays immutable
        object.__setattr__(self, "scores", tuple(self.scores))

    def objective_count(self) -> int:
        return len(self.scores)

    def get_objective(self, i: int) -> ObjectiveScore:
        """Objective at zero-based index ``i``; negative indices are rejected."""
        if not 0 <= i < len(self.scores):
            raise IndexOutOfRangeError(i, len(self.scores))
        return self.scores[i]

    def get_system_configuration(self) -> ParameterSpace | None:
        return self.system_configuration

    def __len__(self) -> int:
        return len(self.scores)

    def __iter__(self) -> Iterator[ObjectiveScore]:
        return iter(self.scores)

    def as_dict(self) -> dict[str, Any]:
        return {s.name: s.value for s in self.scores}

    def to_minimisation_array(self) -> np.ndarray:
        """Objective vector F with maximised objectives negated."""
        return np.array([s.minimisation_value() for s in self.scores], dtype=np.float64)

    def __str__(self) -> str:
        text = ", ".join(s.text for s in self.scores)
        if self.system_configuration is None:
            return text
        return f"{text}, {self.system_configuration.describe()}"


@dataclass(frozen=True, order=True)
class FitnessAssignedScore:
    """Objective scores plus the fitness value used to rank them.

    Ordering and equality use ``fitness`` only; equal fitness values are
    ties and breaking them is up to the caller. How fitness is derived
    from the objectives is also the caller's policy.
    """

    scores: ObjectiveScoreSet = field(compare=False)
    fitness: Any

    @property
    def fitness_value(self) -> Any:
        return self.fitness

    def __str__(self) -> str:
        return f"{format_value(self.fitness)}, {self.scores}"
