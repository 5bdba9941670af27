from __future__ import annotations

from argparse import Namespace
from dataclasses import dataclass, field

from paretomerge.foundation.dominance import PARETO, DominanceRule, parse_epsilon
from paretomerge.foundation.exceptions import ConfigurationError
from paretomerge.foundation.problem import ProblemShape, resolve_problem_shape


@dataclass
class MergeConfig:
    output: str
    n_var: int
    inputs: list[str] = field(default_factory=list)
    problem: str | None = None
    n_obj: int | None = None
    epsilon: tuple[float, ...] | None = None
    result_file: bool = False

    def rule(self) -> DominanceRule:
        if self.epsilon is None:
            return PARETO
        return DominanceRule.epsilon_box(self.epsilon)

    def resolve_shape(self) -> ProblemShape:
        return resolve_problem_shape(self.problem, n_obj=self.n_obj, n_var=self.n_var)


def build_config(args: Namespace) -> MergeConfig:
    """
    Validate parsed command-line options and turn them into a MergeConfig.

    Raises ConfigurationError before any input file is touched.
    """
    problem = getattr(args, "problem", None)
    n_obj = getattr(args, "dimension", None)
    if (problem is None) == (n_obj is None):
        raise ConfigurationError(
            "Exactly one of --problem and --dimension is required.",
            suggestion="Use --problem NAME or --dimension N",
        )
    if n_obj is not None and n_obj <= 0:
        raise ConfigurationError(f"--dimension must be a positive integer, got {n_obj}.")

    n_var = getattr(args, "vars", None)
    if n_var is None:
        raise ConfigurationError("--vars is required.", suggestion="Use --vars N")
    if n_var < 0:
        raise ConfigurationError(f"--vars must be >= 0, got {n_var}.")

    output = getattr(args, "output", None)
    if not output:
        raise ConfigurationError("--output is required.", suggestion="Use --output FILE")

    inputs = [str(p) for p in (getattr(args, "inputs", None) or [])]
    if not inputs:
        raise ConfigurationError("At least one result file to merge is required.")

    epsilon_text = getattr(args, "epsilon", None)
    epsilon = parse_epsilon(epsilon_text) if epsilon_text is not None else None

    config = MergeConfig(
        output=str(output),
        n_var=int(n_var),
        inputs=inputs,
        problem=problem,
        n_obj=n_obj,
        epsilon=epsilon,
        result_file=bool(getattr(args, "result_file", False)),
    )
    with config.resolve_shape() as shape:
        if epsilon is not None:
            config.rule().resolve(shape.n_obj)
    return config


__all__ = ["MergeConfig", "build_config"]
