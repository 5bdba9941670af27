from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

DefaultNVarFn = Callable[[int], int]


@dataclass(frozen=True)
class ProblemSpec:
    """Shape metadata for a named benchmark problem."""

    key: str
    label: str
    default_n_var: int
    default_n_obj: int
    allow_n_obj_override: bool
    default_n_var_fn: DefaultNVarFn | None = None
    description: str = ""

    def resolve_dimensions(self, *, n_var: int | None, n_obj: int | None) -> tuple[int, int]:
        """
        Apply default dimensions and enforce override rules.
        """
        if self.allow_n_obj_override:
            actual_n_obj = n_obj if n_obj is not None else self.default_n_obj
            if actual_n_obj <= 0:
                raise ValueError("n_obj must be a positive integer.")
        else:
            actual_n_obj = self.default_n_obj
            if n_obj is not None and n_obj != actual_n_obj:
                raise ValueError(
                    f"Problem '{self.label}' has a fixed number of objectives ({self.default_n_obj}); overrides are not supported."
                )

        if n_var is None:
            actual_n_var = self.default_n_var_fn(actual_n_obj) if self.default_n_var_fn is not None else self.default_n_var
        else:
            actual_n_var = n_var
        if actual_n_var < 0:
            raise ValueError("n_var must be a non-negative integer.")

        return actual_n_var, actual_n_obj


def _dtlz_n_var(k: int) -> DefaultNVarFn:
    return lambda n_obj: n_obj + k - 1


def _zdt_specs() -> dict[str, ProblemSpec]:
    n_vars = {1: 30, 2: 30, 3: 30, 4: 10, 5: 11, 6: 10}
    return {
        f"zdt{i}": ProblemSpec(
            key=f"zdt{i}",
            label=f"ZDT{i}",
            default_n_var=n_var,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Bi-objective ZDT benchmark.",
        )
        for i, n_var in n_vars.items()
    }


def _dtlz_specs() -> dict[str, ProblemSpec]:
    ks = {1: 5, 2: 10, 3: 10, 4: 10, 5: 10, 6: 10, 7: 20}
    return {
        f"dtlz{i}": ProblemSpec(
            key=f"dtlz{i}",
            label=f"DTLZ{i}",
            default_n_var=3 + k - 1,
            default_n_obj=3,
            allow_n_obj_override=True,
            default_n_var_fn=_dtlz_n_var(k),
            description="Scalable DTLZ benchmark.",
        )
        for i, k in ks.items()
    }


def _uf_specs() -> dict[str, ProblemSpec]:
    return {
        f"uf{i}": ProblemSpec(
            key=f"uf{i}",
            label=f"UF{i}",
            default_n_var=30,
            default_n_obj=2 if i <= 7 else 3,
            allow_n_obj_override=False,
            description="CEC 2009 unconstrained benchmark.",
        )
        for i in range(1, 11)
    }


def _wfg_specs() -> dict[str, ProblemSpec]:
    return {
        f"wfg{i}": ProblemSpec(
            key=f"wfg{i}",
            label=f"WFG{i}",
            default_n_var=24,
            default_n_obj=3,
            allow_n_obj_override=True,
            description="Scalable WFG benchmark.",
        )
        for i in range(1, 10)
    }


_PROBLEM_SPECS: dict[str, ProblemSpec] | None = None


def _build_problem_specs() -> dict[str, ProblemSpec]:
    specs: dict[str, ProblemSpec] = {}
    for family in (_zdt_specs(), _dtlz_specs(), _uf_specs(), _wfg_specs()):
        specs.update(family)
    return specs


def get_problem_specs() -> dict[str, ProblemSpec]:
    global _PROBLEM_SPECS
    if _PROBLEM_SPECS is None:
        _PROBLEM_SPECS = _build_problem_specs()
    return _PROBLEM_SPECS


def available_problem_names() -> tuple[str, ...]:
    return tuple(get_problem_specs().keys())


__all__ = ["ProblemSpec", "available_problem_names", "get_problem_specs"]
