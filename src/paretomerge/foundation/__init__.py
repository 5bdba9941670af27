"""
Core value types, dominance rules, problem shapes and the error hierarchy.
"""

from .candidate import Candidate
from .dominance import PARETO, DominanceRule, compare, dominates, parse_epsilon
from .exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    InvalidEpsilonError,
    ParetoMergeError,
    SinkWriteError,
    SourceReadError,
)
from .problem import ProblemShape, resolve_problem_shape

__all__ = [
    "Candidate",
    "DominanceRule",
    "PARETO",
    "compare",
    "dominates",
    "parse_epsilon",
    "ParetoMergeError",
    "ConfigurationError",
    "InvalidEpsilonError",
    "DimensionMismatchError",
    "SourceReadError",
    "SinkWriteError",
    "ProblemShape",
    "resolve_problem_shape",
]
