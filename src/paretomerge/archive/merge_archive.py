from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from paretomerge.foundation.candidate import Candidate
from paretomerge.foundation.dominance import PARETO, DominanceRule, box_index, corner_distance
from paretomerge.foundation.exceptions import DimensionMismatchError

_INITIAL_ROWS = 64


class Archive:
    """
    Unbounded non-dominated archive fed one candidate at a time.

    Under Pareto dominance the archive keeps the Pareto-minimal subset of
    everything inserted. Under epsilon-box dominance it keeps at most one
    candidate per occupied box and no box is dominated by another occupied box.
    Candidates with an objective vector already present are ignored.

    Member objectives (and, in epsilon mode, box indices and corner distances)
    are cached in row buffers so each insertion is one vectorised pass over
    the current members.
    """

    def __init__(self, rule: DominanceRule | None = None, *, n_obj: int | None = None) -> None:
        self.rule = rule if rule is not None else PARETO
        self._members: list[Candidate] = []
        self._n_obj: int | None = None
        self._n_var: int | None = None
        self._epsilon: np.ndarray | None = None
        self._F = np.empty((0, 0), dtype=float)
        self._box = np.empty((0, 0), dtype=float)
        self._dist = np.empty(0, dtype=float)
        self._size = 0
        self.improvements = 0
        self.dominating_improvements = 0
        if n_obj is not None:
            self._fix_n_obj(int(n_obj))

    # ------------------------------------------------------------------ views
    @property
    def n_obj(self) -> int | None:
        return self._n_obj

    @property
    def epsilon(self) -> np.ndarray | None:
        return None if self._epsilon is None else self._epsilon.copy()

    @property
    def members(self) -> tuple[Candidate, ...]:
        return tuple(self._members)

    @property
    def objectives(self) -> np.ndarray:
        if self._n_obj is None:
            return np.empty((0, 0), dtype=float)
        return self._F[: self._size].copy()

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Candidate]:
        return iter(tuple(self._members))

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Candidate) or self._size == 0 or item.n_obj != self._n_obj:
            return False
        f = item.objective_array()
        return bool(np.any(np.all(self._F[: self._size] == f, axis=1)))

    def clear(self) -> None:
        self._members.clear()
        self._size = 0

    # -------------------------------------------------------------- insertion
    def insert(self, candidate: Candidate) -> bool:
        """
        Offer one candidate; return True iff the archive content changed.
        """
        f = self._check_dimensions(candidate)
        n = self._size
        F = self._F[:n]

        if n and np.any(np.all(F == f, axis=1)):
            return False

        if self._epsilon is None:
            member_dominates = np.all(F <= f, axis=1) & np.any(F < f, axis=1)
            if member_dominates.any():
                return False
            evict = np.all(f <= F, axis=1) & np.any(f < F, axis=1)
            new_box = True
            box = dist = None
        else:
            box = box_index(f, self._epsilon)
            dist = float(corner_distance(f, self._epsilon))
            B = self._box[:n]
            if np.any(np.all(B <= box, axis=1) & np.any(B < box, axis=1)):
                return False
            same_box = np.all(B == box, axis=1)
            if same_box.any():
                idx = int(np.flatnonzero(same_box)[0])
                if self._occupant_wins(idx, f, dist):
                    return False
            evict = (np.all(box <= B, axis=1) & np.any(box < B, axis=1)) | same_box
            new_box = not same_box.any()

        removed = int(np.count_nonzero(evict))
        if removed:
            self._remove(~evict)
        self._append(candidate, f, box, dist)

        self.improvements += 1
        if (self._epsilon is None and removed) or (self._epsilon is not None and new_box):
            self.dominating_improvements += 1
        return True

    def insert_all(self, candidates: Iterable[Candidate]) -> bool:
        """Insert each candidate in order; True iff any single insertion changed the archive."""
        changed = False
        for candidate in candidates:
            if self.insert(candidate):
                changed = True
        return changed

    # ---------------------------------------------------------------- helpers
    def _occupant_wins(self, idx: int, f: np.ndarray, dist: float) -> bool:
        occupant_dist = float(self._dist[idx])
        if occupant_dist != dist:
            return occupant_dist < dist
        return tuple(self._F[idx]) < tuple(f)

    def _fix_n_obj(self, n_obj: int) -> None:
        if n_obj <= 0:
            raise ValueError("n_obj must be positive.")
        epsilon = self.rule.resolve(n_obj) if self.rule.is_epsilon else None
        self._n_obj = n_obj
        self._epsilon = epsilon
        self._F = np.empty((_INITIAL_ROWS, n_obj), dtype=float)
        if self._epsilon is not None:
            self._box = np.empty((_INITIAL_ROWS, n_obj), dtype=float)
            self._dist = np.empty(_INITIAL_ROWS, dtype=float)

    def _check_dimensions(self, candidate: Candidate) -> np.ndarray:
        if self._n_obj is None:
            self._fix_n_obj(candidate.n_obj)
        elif candidate.n_obj != self._n_obj:
            raise DimensionMismatchError(
                f"Candidate has {candidate.n_obj} objectives but the archive holds {self._n_obj}.",
                expected=self._n_obj,
                actual=candidate.n_obj,
            )
        if self._n_var is None:
            self._n_var = candidate.n_var
        elif candidate.n_var != self._n_var:
            raise DimensionMismatchError(
                f"Candidate has {candidate.n_var} variables but the archive holds {self._n_var}.",
                expected=self._n_var,
                actual=candidate.n_var,
            )
        return candidate.objective_array()

    def _remove(self, keep: np.ndarray) -> None:
        n = self._size
        kept = int(np.count_nonzero(keep))
        self._F[:kept] = self._F[:n][keep]
        if self._epsilon is not None:
            self._box[:kept] = self._box[:n][keep]
            self._dist[:kept] = self._dist[:n][keep]
        self._members = [m for m, k in zip(self._members, keep) if k]
        self._size = kept

    def _append(self, candidate: Candidate, f: np.ndarray, box: np.ndarray | None, dist: float | None) -> None:
        n = self._size
        if n == self._F.shape[0]:
            self._grow()
        self._F[n] = f
        if self._epsilon is not None:
            self._box[n] = box
            self._dist[n] = dist
        self._members.append(candidate)
        self._size = n + 1

    def _grow(self) -> None:
        rows = max(_INITIAL_ROWS, 2 * self._F.shape[0])
        F = np.empty((rows, self._F.shape[1]), dtype=float)
        F[: self._size] = self._F[: self._size]
        self._F = F
        if self._epsilon is not None:
            box = np.empty((rows, self._box.shape[1]), dtype=float)
            box[: self._size] = self._box[: self._size]
            dist = np.empty(rows, dtype=float)
            dist[: self._size] = self._dist[: self._size]
            self._box, self._dist = box, dist

    def __repr__(self) -> str:
        return f"Archive(rule={self.rule.kind!r}, size={self._size})"


__all__ = ["Archive"]
