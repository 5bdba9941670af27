from .archive import Archive
from .foundation.candidate import Candidate
from .foundation.dominance import PARETO, DominanceRule, compare, dominates
from .foundation.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    ParetoMergeError,
    SinkWriteError,
    SourceReadError,
)
from .foundation.problem import ProblemShape, resolve_problem_shape
from .merge import MergeReport, merge, merge_files, open_sources

__all__ = [
    "Archive",
    "Candidate",
    "DominanceRule",
    "PARETO",
    "compare",
    "dominates",
    "ParetoMergeError",
    "ConfigurationError",
    "DimensionMismatchError",
    "SinkWriteError",
    "SourceReadError",
    "ProblemShape",
    "resolve_problem_shape",
    "MergeReport",
    "merge",
    "merge_files",
    "open_sources",
]
