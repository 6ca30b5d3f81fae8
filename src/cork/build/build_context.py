"""Build Context - per-invocation build parameters and compilation units.

This module defines:
- BuildParams: Parameters fixed for one build invocation (profile and its flags)
- BuildTarget: One translation unit (source, derived object, include paths)

Design:
    BuildParams flows from the CLI into the orchestrator and on to the
    dependency builder. BuildTarget objects are created while planning a
    project or dependency and discarded when the build call returns; they are
    never persisted.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .build_profiles import BuildProfile, ProfileFlags, get_profile
from .source_scanner import OBJECT_EXTENSION


@dataclass(frozen=True)
class BuildParams:
    """Parameters fixed for one build invocation.

    Attributes:
        profile: Build profile enum value
        profile_flags: Pre-resolved profile flags
    """

    profile: BuildProfile
    profile_flags: ProfileFlags

    @classmethod
    def create(cls, profile: BuildProfile) -> "BuildParams":
        """Create a BuildParams with resolved profile flags."""
        return cls(profile=profile, profile_flags=get_profile(profile))


def object_path_for(source: Path, obj_dir: Path) -> Path:
    """Derive the object file for a source by extension substitution.

    `src/main.c` compiles to `<obj_dir>/main.o`.
    """
    return obj_dir / source.with_suffix(OBJECT_EXTENSION).name


@dataclass(frozen=True)
class BuildTarget:
    """One compilation unit.

    Attributes:
        source_path: The source file
        object_path: The object file it compiles to
        include_paths: Ordered header search directories
    """

    source_path: Path
    object_path: Path
    include_paths: tuple[Path, ...]

    @classmethod
    def create(cls, source: Path, obj_dir: Path, include_paths: Iterable[Path]) -> "BuildTarget":
        return cls(
            source_path=source,
            object_path=object_path_for(source, obj_dir),
            include_paths=tuple(include_paths),
        )
