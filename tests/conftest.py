"""Pytest configuration and fixtures for cork tests.

Most build tests run against FakeToolchain, which records every compile and
link call and writes small placeholder files instead of invoking a compiler.
Tests that need a real compiler live in tests/integration/ and are skipped
when gcc is not installed.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import pytest

from cork import output
from cork.build.build_profiles import ProfileFlags
from cork.build.toolchain import IToolchain
from cork.errors import LinkError, ToolchainError


@dataclass
class CompileCall:
    source: Path
    obj: Path
    include_paths: tuple[Path, ...]
    profile_flags: ProfileFlags


@dataclass
class LinkCall:
    objects: tuple[Path, ...]
    output: Path
    profile_flags: ProfileFlags


@dataclass
class FakeToolchain(IToolchain):
    """Records calls and writes placeholder outputs.

    Attributes:
        fail_on: Source file names whose compile fails with `diagnostics`
        fail_link: If True, every link fails
    """

    compiles: list[CompileCall] = field(default_factory=list)
    links: list[LinkCall] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    fail_link: bool = False
    diagnostics: str = "error: expected ';' before '}' token"

    def compile(self, source: Path, obj: Path, include_paths: Sequence[Path], profile_flags: ProfileFlags) -> None:
        self.compiles.append(CompileCall(source, obj, tuple(include_paths), profile_flags))
        if source.name in self.fail_on:
            raise ToolchainError("compile", str(source), f"{source}:3:1: {self.diagnostics}")
        obj.write_bytes(b"OBJ " + source.name.encode())

    def link(self, objects: Sequence[Path], output: Path, profile_flags: ProfileFlags) -> None:
        self.links.append(LinkCall(tuple(objects), output, profile_flags))
        if self.fail_link:
            raise LinkError(str(output), "undefined reference to `main'")
        output.write_bytes(b"EXE " + b" ".join(obj.name.encode() for obj in objects))

    @property
    def compiled_names(self) -> list[str]:
        return [call.source.name for call in self.compiles]

    def reset(self) -> None:
        self.compiles.clear()
        self.links.clear()


def set_mtime(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


def age_tree(root: Path, seconds: float = 100.0) -> float:
    """Move the mtime of every file under root `seconds` into the past.

    Returns:
        The timestamp that was applied
    """
    timestamp = time.time() - seconds
    for path in root.rglob("*"):
        if path.is_file():
            set_mtime(path, timestamp)
    return timestamp


def write_project(
    root: Path,
    name: str = "app",
    sources: Optional[dict[str, str]] = None,
    headers: Optional[dict[str, str]] = None,
    private_headers: Optional[dict[str, str]] = None,
    dependencies: Optional[dict[str, str]] = None,
) -> Path:
    """Create a project directory with a manifest and the given files."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "src" / "include").mkdir(parents=True, exist_ok=True)
    (root / "include").mkdir(exist_ok=True)

    lines = ["[project]", f'name = "{name}"', 'version = "0.1.0"', "", "[dependencies]"]
    for dep_name, dep_path in (dependencies or {}).items():
        lines.append(f'{dep_name} = {{ path = "{dep_path}" }}')
    (root / "Cork.toml").write_text("\n".join(lines) + "\n")

    if sources is None:
        sources = {"main.c": "int main(void) { return 0; }\n"}
    for filename, text in sources.items():
        (root / "src" / filename).write_text(text)
    for filename, text in (headers or {}).items():
        (root / "include" / filename).write_text(text)
    for filename, text in (private_headers or {}).items():
        (root / "src" / "include" / filename).write_text(text)
    return root


@pytest.fixture
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture(autouse=True)
def _reset_output():
    """Send progress output to whatever sys.stdout is at write time."""
    output._output_stream = None
    output.set_verbose(False)
    yield
    output._output_stream = None
    output.set_verbose(False)


@pytest.fixture
def make_project():
    """Factory fixture around write_project."""
    return write_project


@pytest.fixture
def age():
    """Factory fixture around age_tree."""
    return age_tree
