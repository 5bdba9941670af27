from __future__ import annotations

import ast
from pathlib import Path

ALLOWED_PRINT_PATHS = ("src/paretomerge/cli.py",)


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _call_name(node: ast.Call) -> str | None:
    func = node.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
        return f"{func.value.id}.{func.attr}"
    return None


def _library_calls() -> list[tuple[str, int, str]]:
    repo_root = _repo_root()
    src_root = repo_root / "src" / "paretomerge"
    calls: list[tuple[str, int, str]] = []
    for path in src_root.rglob("*.py"):
        rel_path = path.relative_to(repo_root).as_posix()
        text = path.read_text(encoding="utf-8-sig")
        try:
            tree = ast.parse(text)
        except SyntaxError as exc:  # pragma: no cover - should not happen
            raise AssertionError(f"Failed to parse {rel_path}: {exc}") from exc
        for node in ast.walk(tree):
            if isinstance(node, ast.Call):
                name = _call_name(node)
                if name:
                    calls.append((rel_path, getattr(node, "lineno", 0), name))
    return calls


def test_no_prints_in_library() -> None:
    violations = [
        f"{rel_path}:{lineno}: {name}()"
        for rel_path, lineno, name in _library_calls()
        if name in {"print", "pprint", "pprint.pprint"} and rel_path not in ALLOWED_PRINT_PATHS
    ]
    if violations:
        msg = ["print() is forbidden outside the CLI module:"]
        msg.extend(f"- {item}" for item in sorted(violations))
        raise AssertionError("\n".join(msg))


def test_library_never_calls_basic_config() -> None:
    violations = [
        f"{rel_path}:{lineno}"
        for rel_path, lineno, name in _library_calls()
        if name in {"logging.basicConfig", "basicConfig"}
    ]
    assert not violations, violations
