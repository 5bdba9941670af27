"""
Dominance rules used by the merge archive.

A rule is a tagged value (``"pareto"`` or ``"epsilon_box"``) dispatched through
``compare``; there is no comparator class hierarchy. Minimization is assumed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Union

import numpy as np

from .candidate import Candidate
from .exceptions import DimensionMismatchError, InvalidEpsilonError

RuleKind = Literal["pareto", "epsilon_box"]
ObjectivesLike = Union[Candidate, Sequence[float], np.ndarray]


@dataclass(frozen=True)
class DominanceRule:
    kind: RuleKind = "pareto"
    epsilon: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        if self.kind not in ("pareto", "epsilon_box"):
            raise ValueError(f"Unknown dominance rule '{self.kind}'.")
        if self.kind == "pareto":
            if self.epsilon is not None:
                raise InvalidEpsilonError("Pareto dominance does not take an epsilon vector.", self.epsilon)
            return
        if self.epsilon is None or len(self.epsilon) == 0:
            raise InvalidEpsilonError("Epsilon-box dominance needs at least one epsilon value.", self.epsilon)
        values = tuple(float(e) for e in self.epsilon)
        for value in values:
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidEpsilonError(f"Epsilon values must be finite and > 0, got {value!r}.", values)
        object.__setattr__(self, "epsilon", values)

    @classmethod
    def pareto(cls) -> "DominanceRule":
        return cls("pareto")

    @classmethod
    def epsilon_box(cls, epsilon: float | Sequence[float]) -> "DominanceRule":
        if isinstance(epsilon, (int, float)):
            epsilon = (float(epsilon),)
        return cls("epsilon_box", tuple(epsilon))

    @property
    def is_epsilon(self) -> bool:
        return self.kind == "epsilon_box"

    def resolve(self, n_obj: int) -> np.ndarray:
        """
        Return the epsilon vector for ``n_obj`` objectives.

        A single value is broadcast to every objective; any other length must
        match ``n_obj`` exactly.
        """
        if self.epsilon is None:
            raise InvalidEpsilonError("Pareto dominance has no epsilon vector.")
        if len(self.epsilon) == 1:
            return np.full(n_obj, self.epsilon[0], dtype=float)
        if len(self.epsilon) != n_obj:
            raise InvalidEpsilonError(
                f"Got {len(self.epsilon)} epsilon values for {n_obj} objectives; expected 1 or {n_obj}.",
                self.epsilon,
            )
        return np.asarray(self.epsilon, dtype=float)


def parse_epsilon(text: str) -> tuple[float, ...]:
    """Parse the command-line form ``"e1,e2,..."`` into a tuple of floats."""
    parts = [part.strip() for part in str(text).split(",")]
    if not parts or any(not part for part in parts):
        raise InvalidEpsilonError(f"Malformed epsilon vector '{text}'.", text)
    try:
        values = tuple(float(part) for part in parts)
    except ValueError as exc:
        raise InvalidEpsilonError(f"Malformed epsilon vector '{text}': {exc}.", text) from exc
    # Run the positivity checks eagerly.
    DominanceRule.epsilon_box(values)
    return values


def box_index(F: np.ndarray, epsilon: np.ndarray) -> np.ndarray:
    """Grid cell of each objective vector (last axis): ``floor(f / eps)``."""
    return np.floor(np.asarray(F, dtype=float) / epsilon)


def corner_distance(F: np.ndarray, epsilon: np.ndarray) -> np.ndarray:
    """Squared normalized distance of each vector to the lower corner of its box."""
    F = np.asarray(F, dtype=float)
    offsets = (F - box_index(F, epsilon) * epsilon) / epsilon
    return np.sum(offsets * offsets, axis=-1)


def _as_objectives(value: ObjectivesLike) -> np.ndarray:
    if isinstance(value, Candidate):
        return value.objective_array()
    return np.asarray(value, dtype=float)


def _pareto_compare(a: np.ndarray, b: np.ndarray) -> int:
    a_le = bool(np.all(a <= b))
    b_le = bool(np.all(b <= a))
    if a_le and not b_le:
        return -1
    if b_le and not a_le:
        return 1
    return 0


def _epsilon_compare(a: np.ndarray, b: np.ndarray, epsilon: np.ndarray) -> int:
    box_a = box_index(a, epsilon)
    box_b = box_index(b, epsilon)
    result = _pareto_compare(box_a, box_b)
    if result != 0 or not np.array_equal(box_a, box_b):
        return result
    dist_a = float(corner_distance(a, epsilon))
    dist_b = float(corner_distance(b, epsilon))
    if dist_a < dist_b:
        return -1
    if dist_b < dist_a:
        return 1
    # Equal closeness: lexicographic order on the objective vector.
    return -1 if tuple(a) < tuple(b) else 1


def compare(rule: DominanceRule, a: ObjectivesLike, b: ObjectivesLike) -> int:
    """
    Compare two candidates (or objective vectors) under ``rule``.

    Returns -1 if ``a`` dominates ``b``, 1 if ``b`` dominates ``a`` and 0 if
    neither does. Identical objective vectors never dominate each other.
    """
    fa = _as_objectives(a)
    fb = _as_objectives(b)
    if fa.shape != fb.shape:
        raise DimensionMismatchError(
            f"Cannot compare objective vectors of length {fa.size} and {fb.size}.",
            expected=int(fa.size),
            actual=int(fb.size),
        )
    if np.array_equal(fa, fb):
        return 0
    if rule.kind == "pareto":
        return _pareto_compare(fa, fb)
    return _epsilon_compare(fa, fb, rule.resolve(fa.size))


def dominates(rule: DominanceRule, a: ObjectivesLike, b: ObjectivesLike) -> bool:
    return compare(rule, a, b) < 0


PARETO = DominanceRule.pareto()

__all__ = [
    "DominanceRule",
    "PARETO",
    "RuleKind",
    "box_index",
    "compare",
    "corner_distance",
    "dominates",
    "parse_epsilon",
]
