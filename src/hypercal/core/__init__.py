"""Core module: parameter spaces, geometry, scores, evaluators."""

from .errors import (
    DomainError,
    EmptyInputError,
    EvaluatorNotCloneableError,
    HypercalError,
    IncompatibleGeometryError,
    IncompatibleObjectiveError,
    IncompatibleSystemError,
    IndexOutOfRangeError,
    UnknownVariableError,
)
from .evaluator import (
    CloneableObjectiveEvaluator,
    FunctionEvaluator,
    ObjectiveEvaluator,
    evaluate_batch,
    spawn_worker,
)
from .geometry import (
    UniformSource,
    centroid,
    generate_random,
    generate_random_within,
    homothetic_transform,
)
from .hypercube import MappingSystem, ParameterSpace, ParameterSystem, Variable
from .scores import FitnessAssignedScore, ObjectiveScore, ObjectiveScoreSet

__all__ = [
    "ParameterSpace",
    "Variable",
    "ParameterSystem",
    "MappingSystem",
    "UniformSource",
    "centroid",
    "homothetic_transform",
    "generate_random_within",
    "generate_random",
    "ObjectiveScore",
    "ObjectiveScoreSet",
    "FitnessAssignedScore",
    "ObjectiveEvaluator",
    "CloneableObjectiveEvaluator",
    "FunctionEvaluator",
    "evaluate_batch",
    "spawn_worker",
    "HypercalError",
    "DomainError",
    "UnknownVariableError",
    "IncompatibleGeometryError",
    "EmptyInputError",
    "IncompatibleObjectiveError",
    "IncompatibleSystemError",
    "IndexOutOfRangeError",
    "EvaluatorNotCloneableError",
]
