"""
Bare objective listings: one objective vector per line, space separated.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import numpy as np

from paretomerge.foundation.candidate import Candidate
from paretomerge.foundation.exceptions import SinkWriteError, SourceReadError


def objectives_matrix(candidates: Iterable[Candidate], *, n_obj: int | None = None) -> np.ndarray:
    rows = [c.objectives for c in candidates]
    if not rows:
        return np.empty((0, n_obj or 0), dtype=float)
    return np.asarray(rows, dtype=float)


def write_objectives(path: str | Path, candidates: Iterable[Candidate], *, n_obj: int | None = None) -> Path:
    """
    Save the objective vectors of ``candidates`` to ``path``, replacing any existing file.
    """
    path = Path(path)
    F = objectives_matrix(candidates, n_obj=n_obj)
    try:
        np.savetxt(path, F, delimiter=" ", fmt="%.17g")
    except OSError as exc:
        raise SinkWriteError(f"Cannot write objective listing '{path}': {exc}", path=str(path)) from exc
    return path


def read_objectives(path: str | Path) -> np.ndarray:
    """Load a bare objective listing as an ``(n, n_obj)`` array."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(f"Cannot open objective listing '{path}': {exc}", path=str(path)) from exc
    if not text.strip():
        return np.empty((0, 0), dtype=float)
    try:
        return np.loadtxt(path, dtype=float, ndmin=2)
    except ValueError as exc:
        raise SourceReadError(f"Malformed objective listing '{path}': {exc}", path=str(path)) from exc


__all__ = ["objectives_matrix", "read_objectives", "write_objectives"]
