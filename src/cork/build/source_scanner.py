"""Project layout and source discovery.

A cork project (and every local dependency) uses a fixed layout:

    Cork.toml
    src/                     own sources (*.c, not recursive)
    src/include/             private headers (*.h), own staleness only
    include/                 public headers (*.h), exposed to dependents
    build/<profile>/obj/     generated object files
    build/<profile>/<name>   generated executable

Scans are non-recursive and sorted by file name so that compile order, link
order and build logs are the same on every run and every platform.
"""

import sys
from dataclasses import dataclass
from pathlib import Path

from ..config.manifest import MANIFEST_FILENAME
from ..errors import SourceDiscoveryError
from .build_profiles import BuildProfile

SOURCE_EXTENSION = ".c"
HEADER_EXTENSION = ".h"
OBJECT_EXTENSION = ".o"


@dataclass(frozen=True)
class ProjectLayout:
    """Well-known paths of a project rooted at `root`."""

    root: Path

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    @property
    def src_dir(self) -> Path:
        return self.root / "src"

    @property
    def public_include_dir(self) -> Path:
        return self.root / "include"

    @property
    def private_include_dir(self) -> Path:
        return self.root / "src" / "include"

    @property
    def build_dir(self) -> Path:
        return self.root / "build"

    def profile_dir(self, profile: BuildProfile) -> Path:
        return self.build_dir / profile.value

    def obj_dir(self, profile: BuildProfile) -> Path:
        return self.profile_dir(profile) / "obj"

    def executable_path(self, profile: BuildProfile, name: str) -> Path:
        filename = f"{name}.exe" if sys.platform == "win32" else name
        return self.profile_dir(profile) / filename


def scan_files(directory: Path, extension: str) -> list[Path]:
    """List files with the given extension directly inside directory.

    Args:
        directory: Directory to scan (not recursive)
        extension: Suffix to match, including the dot (e.g. ".c")

    Returns:
        Matching files sorted by name

    Raises:
        SourceDiscoveryError: If the directory cannot be read
    """
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise SourceDiscoveryError(f"failed to read directory {directory}: {e}") from e

    return sorted((p for p in entries if p.suffix == extension and p.is_file()), key=lambda p: p.name)


def scan_sources(directory: Path) -> list[Path]:
    return scan_files(directory, SOURCE_EXTENSION)


def scan_headers(directory: Path) -> list[Path]:
    return scan_files(directory, HEADER_EXTENSION)
