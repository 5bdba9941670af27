from __future__ import annotations

import logging
from dataclasses import dataclass
from difflib import get_close_matches
from collections.abc import Sequence

from ..candidate import Candidate
from ..exceptions import ConfigurationError, DimensionMismatchError
from .specs import get_problem_specs


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class ProblemShape:
    """Fixed variable and objective counts every candidate of a session must match."""

    n_var: int
    n_obj: int
    name: str | None = None

    def __post_init__(self) -> None:
        if self.n_var < 0:
            raise ConfigurationError(f"Number of variables must be >= 0, got {self.n_var}.")
        if self.n_obj <= 0:
            raise ConfigurationError(f"Number of objectives must be positive, got {self.n_obj}.")

    @property
    def record_length(self) -> int:
        return self.n_var + self.n_obj

    def validate(self, candidate: Candidate, *, path: str | None = None) -> Candidate:
        if candidate.n_var != self.n_var:
            raise DimensionMismatchError(
                f"Candidate has {candidate.n_var} variables, expected {self.n_var}.",
                expected=self.n_var,
                actual=candidate.n_var,
                path=path,
            )
        if candidate.n_obj != self.n_obj:
            raise DimensionMismatchError(
                f"Candidate has {candidate.n_obj} objectives, expected {self.n_obj}.",
                expected=self.n_obj,
                actual=candidate.n_obj,
                path=path,
            )
        return candidate

    def close(self) -> None:
        _logger().debug("Released problem shape %s", self.name or f"({self.n_var}, {self.n_obj})")

    def __enter__(self) -> "ProblemShape":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _suggest_names(name: str, options: Sequence[str]) -> list[str]:
    if not name or not options:
        return []
    lookup = {option.lower(): option for option in options}
    matches = get_close_matches(name.lower(), lookup.keys(), n=3, cutoff=0.6)
    return [lookup[match] for match in matches]


def _format_unknown_problem(name: str, options: list[str]) -> str:
    parts = [f"Unknown problem '{name}'."]
    suggestions = _suggest_names(name, options)
    if suggestions:
        if len(suggestions) == 1:
            parts.append(f"Did you mean '{suggestions[0]}'?")
        else:
            parts.append("Did you mean one of: " + ", ".join(f"'{item}'" for item in suggestions) + "?")
    return " ".join(parts)


def resolve_problem_shape(
    problem: str | None = None,
    *,
    n_obj: int | None = None,
    n_var: int | None = None,
) -> ProblemShape:
    """
    Resolve the session shape from a named problem or from explicit counts.

    Exactly one of ``problem`` and ``n_obj`` must be given. With a named
    problem the registry fixes the objective count and ``n_var`` overrides its
    default variable count.
    """
    if problem is not None and n_obj is not None:
        raise ConfigurationError(
            "Specify either a problem name or an objective count, not both.",
            suggestion="Use --problem NAME or --dimension N",
        )
    if problem is None and n_obj is None:
        raise ConfigurationError(
            "A problem name or an objective count is required.",
            suggestion="Use --problem NAME or --dimension N",
        )

    if problem is None:
        if n_var is None:
            raise ConfigurationError("The number of decision variables is required.", suggestion="Use --vars N")
        return ProblemShape(n_var=int(n_var), n_obj=int(n_obj))  # type: ignore[arg-type]

    specs = get_problem_specs()
    key = problem.lower()
    if key not in specs:
        available = sorted(specs)
        raise ConfigurationError(_format_unknown_problem(problem, available), details={"problem": problem})
    try:
        actual_n_var, actual_n_obj = specs[key].resolve_dimensions(n_var=n_var, n_obj=None)
    except ValueError as exc:
        raise ConfigurationError(str(exc), details={"problem": problem}) from exc
    return ProblemShape(n_var=actual_n_var, n_obj=actual_n_obj, name=specs[key].label)


__all__ = ["ProblemShape", "resolve_problem_shape"]
