"""
Problem shapes: named benchmark registry and explicit variable/objective counts.
"""

from .shape import ProblemShape, resolve_problem_shape  # noqa: F401
from .specs import ProblemSpec, available_problem_names, get_problem_specs  # noqa: F401

__all__ = [
    "ProblemShape",
    "ProblemSpec",
    "available_problem_names",
    "get_problem_specs",
    "resolve_problem_shape",
]
