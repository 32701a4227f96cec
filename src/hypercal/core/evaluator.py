"""Objective evaluators, the interface between models and search engines.

Interface:
    evaluator.evaluate_score(configuration) -> ObjectiveScoreSet

Two evaluator kinds exist, and the kind says whether parallel use is safe:

    ObjectiveEvaluator           single-threaded only; never share across workers
    CloneableObjectiveEvaluator  ``clone()`` yields an independent evaluator
                                 per worker

Nothing here starts threads. ``spawn_worker`` hands back the unshared
(evaluator, configuration) pair a concurrent worker needs; scheduling,
timeouts and cancellation belong to the search engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .errors import EvaluatorNotCloneableError
from .hypercube import ParameterSpace
from .logging import get_logger
from .scores import ObjectiveScore, ObjectiveScoreSet

logger = get_logger(__name__)


class ObjectiveEvaluator(ABC):
    """Black box turning a configuration into objective scores.

    May be arbitrarily expensive and may block. Instances of this base
    kind must not be invoked concurrently.
    """

    @abstractmethod
    def evaluate_score(self, configuration: ParameterSpace) -> ObjectiveScoreSet:
        """Evaluate the objective values for a candidate configuration."""

    def is_cloneable(self) -> bool:
        return False


class CloneableObjectiveEvaluator(ObjectiveEvaluator):
    """Evaluator whose clones share no mutable state (e.g. no model runner)."""

    @abstractmethod
    def clone(self) -> CloneableObjectiveEvaluator:
        """Return an independent evaluator safe to use from another worker."""

    def is_cloneable(self) -> bool:
        return True


class FunctionEvaluator(CloneableObjectiveEvaluator):
    """Evaluator wrapping a plain objective function.

    Args:
        func: Called with ``{name: value}`` of the configuration, returns a
            mapping containing one value per declared objective.
        objectives: Ordered ``{objective name: maximise}``.

    The function must be free of shared mutable state for clones to be
    safe; clones reuse the same function object.
    """

    def __init__(
        self,
        func: Callable[[dict[str, Any]], Mapping[str, Any]],
        objectives: Mapping[str, bool],
    ) -> None:
        if not objectives:
            raise ValueError("At least one objective must be declared")
        self.func = func
        self.objectives = dict(objectives)
        self.n_evaluations = 0

    def evaluate_score(self, configuration: ParameterSpace) -> ObjectiveScoreSet:
        outputs = self.func(configuration.as_dict())
        self.n_evaluations += 1

        scores = []
        for name, maximise in self.objectives.items():
            if name not in outputs:
                raise KeyError(f"Objective function did not return '{name}'")
            scores.append(ObjectiveScore(name=name, value=outputs[name], maximise=maximise))
        return ObjectiveScoreSet(scores, configuration)

    def clone(self) -> FunctionEvaluator:
        # Evaluation counters are per instance
        return FunctionEvaluator(self.func, self.objectives)


def spawn_worker(
    evaluator: ObjectiveEvaluator, configuration: ParameterSpace
) -> tuple[ObjectiveEvaluator, ParameterSpace]:
    """Return an unshared (evaluator, configuration) pair for a worker.

    Raises:
        EvaluatorNotCloneableError: If ``evaluator`` is single-threaded only.
    """
    if not isinstance(evaluator, CloneableObjectiveEvaluator) or not evaluator.is_cloneable():
        raise EvaluatorNotCloneableError(
            f"{type(evaluator).__name__} cannot be cloned for concurrent evaluation"
        )
    return evaluator.clone(), configuration.clone()


def evaluate_batch(
    evaluator: ObjectiveEvaluator, configurations: Iterable[ParameterSpace]
) -> list[ObjectiveScoreSet]:
    """Evaluate configurations sequentially, preserving input order.

    Args:
        evaluator: Any evaluator; used from the calling thread only.
        configurations: Candidates to score.

    Returns:
        One score set per configuration.
    """
    configurations = list(configurations)
    with logger.timer("evaluate_batch", n=len(configurations)):
        results = [evaluator.evaluate_score(c) for c in configurations]
    return results
