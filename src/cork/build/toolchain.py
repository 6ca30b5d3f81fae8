"""Toolchain Invoker.

This module is the boundary between orchestration and compilation. The
orchestrator and dependency builder only ever talk to an IToolchain; the
default GccToolchain runs a gcc-compatible compiler driver as an external
process, synchronously, and reports failures with the compiler's own stderr.

Command lines:
    compile: <cc> -c <source> -o <object> -I <dir>... <profile compile flags>
    link:    <cc> -o <output> <object>... <profile link flags>

The driver is taken from $CORK_CC, then $CC, then "gcc".
"""

import logging
import os
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ..errors import LinkError, ToolchainError
from ..subprocess_utils import format_command, safe_run
from .build_profiles import ProfileFlags

logger = logging.getLogger(__name__)

DEFAULT_COMPILER = "gcc"


class IToolchain(ABC):
    """Compile and link capability used by the build orchestration."""

    @abstractmethod
    def compile(self, source: Path, obj: Path, include_paths: Sequence[Path], profile_flags: ProfileFlags) -> None:
        """Compile one source file into one object file.

        Raises:
            ToolchainError: If the compiler cannot be spawned or fails
        """

    @abstractmethod
    def link(self, objects: Sequence[Path], output: Path, profile_flags: ProfileFlags) -> None:
        """Link object files into an executable.

        Raises:
            LinkError: If the linker cannot be spawned or fails
        """

    def describe(self) -> str:
        """Short description for the profile banner."""
        return type(self).__name__


def resolve_compiler(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return the compiler driver command from the environment.

    The value may carry arguments (e.g. CC="ccache gcc").
    """
    env = os.environ if environ is None else environ
    value = env.get("CORK_CC") or env.get("CC") or DEFAULT_COMPILER
    return shlex.split(value)


class GccToolchain(IToolchain):
    """Toolchain backed by a gcc-compatible compiler driver (gcc, clang, cc)."""

    def __init__(self, compiler: Optional[Sequence[str]] = None):
        """
        Args:
            compiler: Compiler command (defaults to resolve_compiler())
        """
        self.compiler = list(compiler) if compiler else resolve_compiler()

    def describe(self) -> str:
        return " ".join(self.compiler)

    def compile_command(self, source: Path, obj: Path, include_paths: Sequence[Path], profile_flags: ProfileFlags) -> list[str]:
        cmd = [*self.compiler, "-c", str(source), "-o", str(obj)]
        for include_dir in include_paths:
            cmd.extend(["-I", str(include_dir)])
        cmd.extend(profile_flags.compile_flags)
        return cmd

    def link_command(self, objects: Sequence[Path], output: Path, profile_flags: ProfileFlags) -> list[str]:
        cmd = [*self.compiler, "-o", str(output)]
        cmd.extend(str(obj) for obj in objects)
        cmd.extend(profile_flags.link_flags)
        return cmd

    def compile(self, source: Path, obj: Path, include_paths: Sequence[Path], profile_flags: ProfileFlags) -> None:
        cmd = self.compile_command(source, obj, include_paths, profile_flags)
        result = self._execute(cmd, phase="compile", unit=str(source))
        if result.returncode != 0:
            raise ToolchainError("compile", str(source), result.stderr)

    def link(self, objects: Sequence[Path], output: Path, profile_flags: ProfileFlags) -> None:
        cmd = self.link_command(objects, output, profile_flags)
        try:
            result = self._execute(cmd, phase="link", unit=str(output))
        except ToolchainError as e:
            raise LinkError(e.unit, e.diagnostics) from e.__cause__
        if result.returncode != 0:
            raise LinkError(str(output), result.stderr)

    def _execute(self, cmd: list[str], phase: str, unit: str) -> subprocess.CompletedProcess:
        try:
            result = safe_run(cmd, capture_output=True, text=True, errors="replace")
        except OSError as e:
            raise ToolchainError(phase, unit, f"failed to run `{self.compiler[0]}`: {e}") from e

        if result.returncode != 0:
            logger.debug("%s failed (exit %d): %s", phase, result.returncode, format_command(cmd))
        elif result.stderr:
            # Warnings go to the user unchanged
            logger.warning("%s", result.stderr.rstrip())
        return result
