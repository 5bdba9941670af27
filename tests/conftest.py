from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

Row = Sequence[float]


def render_result_file(entries: Sequence[Sequence[Row]], *, terminated: bool = True, header: bool = True) -> str:
    lines: list[str] = []
    if header:
        lines.append("# Problem = Test")
    for index, entry in enumerate(entries):
        lines.append(f"//entry={index}")
        for row in entry:
            lines.append(" ".join(repr(v) if isinstance(v, float) else str(v) for v in row))
        if terminated or index < len(entries) - 1:
            lines.append("#")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_result_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a result file made of ``entries`` (each a list of flat rows) and return its path."""
    counter = {"n": 0}

    def _write(entries: Sequence[Sequence[Row]], *, name: str | None = None, **kwargs) -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"run{counter['n']}.set")
        path.write_text(render_result_file(entries, **kwargs), encoding="utf-8")
        return path

    return _write
