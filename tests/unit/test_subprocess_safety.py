"""Static check that every process is started through cork.subprocess_utils.

Direct subprocess.run()/Popen() calls skip the stdin and Windows console
defaults applied by safe_run().
"""

import ast
from pathlib import Path

SRC_DIR = Path(__file__).parent.parent.parent / "src" / "cork"

UNSAFE_METHODS = {"run", "Popen", "call", "check_call", "check_output"}
EXCLUDED_FILES = {"subprocess_utils.py"}


class SubprocessCallVisitor(ast.NodeVisitor):
    """Collect `subprocess.<method>(...)` calls."""

    def __init__(self) -> None:
        self.errors: list[tuple[int, str]] = []

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if (
            isinstance(func, ast.Attribute)
            and isinstance(func.value, ast.Name)
            and func.value.id == "subprocess"
            and func.attr in UNSAFE_METHODS
        ):
            self.errors.append((node.lineno, f"subprocess.{func.attr}()"))
        self.generic_visit(node)


def _violations(source: str) -> list[tuple[int, str]]:
    visitor = SubprocessCallVisitor()
    visitor.visit(ast.parse(source))
    return visitor.errors


def test_visitor_flags_direct_calls():
    source = "import subprocess\nsubprocess.run(['gcc'])\nsubprocess.Popen(['ls'])\nsafe_run(['gcc'])\n"
    assert _violations(source) == [(2, "subprocess.run()"), (3, "subprocess.Popen()")]


def test_visitor_ignores_constants():
    assert _violations("import subprocess\nx = subprocess.DEVNULL\n") == []


def test_library_code_uses_safe_run():
    violations = []
    for file_path in sorted(SRC_DIR.rglob("*.py")):
        if file_path.name in EXCLUDED_FILES:
            continue
        for line, call in _violations(file_path.read_text(encoding="utf-8")):
            violations.append(f"{file_path.relative_to(SRC_DIR)}:{line}: {call} - use safe_run()")

    assert violations == [], "\n".join(violations)
