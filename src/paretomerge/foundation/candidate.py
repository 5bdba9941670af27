from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

Value = float | int


@dataclass(frozen=True)
class Candidate:
    """
    One decoded solution: decision variables plus objective values.

    Both vectors are stored as tuples so a Candidate is hashable and never
    changes after decoding.
    """

    variables: tuple[Value, ...]
    objectives: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "objectives", tuple(float(v) for v in self.objectives))
        if not self.objectives:
            raise ValueError("A candidate needs at least one objective value.")
        if not all(math.isfinite(v) for v in self.objectives):
            raise ValueError(f"Objective values must be finite, got {self.objectives}.")

    @classmethod
    def from_values(cls, values: Sequence[Value], n_var: int) -> "Candidate":
        """Split a flat record ``[x_1..x_n, f_1..f_m]`` after ``n_var`` entries."""
        if n_var < 0 or n_var > len(values):
            raise ValueError(f"Cannot take {n_var} variables from a record of length {len(values)}.")
        return cls(variables=tuple(values[:n_var]), objectives=tuple(values[n_var:]))

    @property
    def n_var(self) -> int:
        return len(self.variables)

    @property
    def n_obj(self) -> int:
        return len(self.objectives)

    def objective_array(self) -> np.ndarray:
        return np.asarray(self.objectives, dtype=float)


__all__ = ["Candidate", "Value"]
