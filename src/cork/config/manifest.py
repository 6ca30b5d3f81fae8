"""Cork.toml manifest loading.

A manifest declares a project's identity and its local path dependencies:

    [project]
    name = "mathproj"
    version = "0.1.0"

    [dependencies]
    mathlib = { path = "../mathlib" }

Dependencies keep the order in which they are declared in the file. That
order is observable: dependencies are built, and their objects are linked, in
declaration order.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ..errors import ConfigError

MANIFEST_FILENAME = "Cork.toml"

# Names that would collide with the profile directory layout.
RESERVED_PROJECT_NAMES = frozenset({".", "..", "obj"})


@dataclass(frozen=True)
class Dependency:
    """A sibling project referenced by filesystem path."""

    path: str

    def resolve(self, base_dir: Path) -> Path:
        """Return the dependency directory, resolving relative paths against base_dir."""
        dep_path = Path(self.path).expanduser()
        if not dep_path.is_absolute():
            dep_path = base_dir / dep_path
        return dep_path.resolve()


@dataclass(frozen=True)
class Manifest:
    """Immutable view of a loaded Cork.toml.

    Attributes:
        name: Project name (non-empty)
        version: Project version string (not validated)
        dependencies: Read-only mapping of dependency name to Dependency,
            in declaration order
        path: The manifest file this was loaded from
    """

    name: str
    version: str
    dependencies: Mapping[str, Dependency] = field(default_factory=lambda: MappingProxyType({}))
    path: Path | None = None

    @property
    def project_dir(self) -> Path | None:
        return self.path.parent if self.path is not None else None


def validate_project_name(name: str) -> None:
    """Check that a project name can serve as the executable file name.

    Raises:
        ConfigError: If the name contains a path separator or is reserved
    """
    if "/" in name or "\\" in name:
        raise ConfigError(f"project name `{name}` must not contain a path separator")
    if name in RESERVED_PROJECT_NAMES:
        raise ConfigError(f"project name `{name}` is reserved")


def load_manifest(path: Path) -> Manifest:
    """Load and validate a Cork.toml file.

    Args:
        path: Path to the manifest file

    Returns:
        The parsed Manifest

    Raises:
        ConfigError: If the file is missing, unreadable, not valid TOML, or
            does not match the manifest schema
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"could not find `{path.name}` in `{path.parent}`")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"failed to read {path}: {e}") from e

    return parse_manifest(data, path)


def parse_manifest(data: Mapping[str, Any], path: Path | None = None) -> Manifest:
    """Validate already-decoded manifest data.

    Raises:
        ConfigError: If required fields are missing or have the wrong type
    """
    where = str(path) if path is not None else MANIFEST_FILENAME

    project = data.get("project")
    if not isinstance(project, dict):
        raise ConfigError(f"{where}: missing [project] section")

    name = project.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"{where}: [project] requires a non-empty string `name`")
    try:
        validate_project_name(name)
    except ConfigError as e:
        raise ConfigError(f"{where}: {e}") from None

    version = project.get("version")
    if not isinstance(version, str):
        raise ConfigError(f"{where}: [project] requires a string `version`")

    raw_deps = data.get("dependencies", {})
    if not isinstance(raw_deps, dict):
        raise ConfigError(f"{where}: [dependencies] must be a table")

    dependencies: dict[str, Dependency] = {}
    for dep_name, entry in raw_deps.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"{where}: dependency `{dep_name}` must be a table like {{ path = \"...\" }}")
        dep_path = entry.get("path")
        if not isinstance(dep_path, str) or not dep_path:
            raise ConfigError(f"{where}: dependency `{dep_name}` requires a string `path`")
        dependencies[dep_name] = Dependency(path=dep_path)

    return Manifest(
        name=name,
        version=version,
        dependencies=MappingProxyType(dependencies),
        path=path,
    )
