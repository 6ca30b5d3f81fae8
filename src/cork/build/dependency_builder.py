"""Dependency Build Planner.

Builds one local path dependency in place, inside its own directory:

    <dep>/build/<profile>/obj/*.o

A dependency compiles against its own public headers only. It never sees the
parent's headers, and its objects are returned to the parent for the final
link. The parent adds <dep>/include to its own include path whether or not
anything was compiled here.

Dependencies declared by a dependency are not built. The manifest is still
loaded and validated, and a warning names what was skipped.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config.manifest import Dependency, load_manifest
from ..errors import BuildError, DependencyError
from ..output import log_unit, log_warning
from .build_context import BuildParams, BuildTarget
from .source_scanner import ProjectLayout, scan_headers, scan_sources
from .staleness import StalenessVerdict, check_staleness
from .toolchain import IToolchain

logger = logging.getLogger(__name__)


@dataclass
class DependencyBuildResult:
    """Outcome of building one dependency.

    Attributes:
        name: Dependency name as declared by the parent
        root: Resolved dependency directory
        include_dir: Public include directory to add to the parent's include path
        objects: Every object file of the dependency, in source order
        compiled: Sources compiled during this call
    """

    name: str
    root: Path
    include_dir: Path
    objects: list[Path] = field(default_factory=list)
    compiled: list[Path] = field(default_factory=list)

    @property
    def recompiled(self) -> bool:
        return bool(self.compiled)


def build_dependency(
    name: str,
    dependency: Dependency,
    params: BuildParams,
    toolchain: IToolchain,
    base_dir: Path,
) -> DependencyBuildResult:
    """Compile the stale sources of one dependency.

    Args:
        name: Dependency name (used for attribution in logs and errors)
        dependency: Dependency record from the parent manifest
        params: Build parameters of the current invocation
        toolchain: Toolchain used for compiling
        base_dir: Directory relative dependency paths are resolved against

    Returns:
        DependencyBuildResult with the dependency's objects in source order

    Raises:
        DependencyError: If the dependency's manifest, sources or headers are
            missing, its object directory cannot be created, or a compile fails
    """
    try:
        return _build_dependency(name, dependency, params, toolchain, base_dir)
    except DependencyError:
        raise
    except (BuildError, OSError) as e:
        raise DependencyError(name, e) from e


def _build_dependency(
    name: str,
    dependency: Dependency,
    params: BuildParams,
    toolchain: IToolchain,
    base_dir: Path,
) -> DependencyBuildResult:
    layout = ProjectLayout(dependency.resolve(base_dir))
    if not layout.manifest_path.is_file():
        raise DependencyError(
            name, FileNotFoundError(f"missing {layout.manifest_path.name} at `{layout.root}`")
        )

    manifest = load_manifest(layout.manifest_path)
    if manifest.dependencies:
        log_warning(
            f"dependency `{name}` declares its own dependencies "
            f"({', '.join(manifest.dependencies)}); they are not built"
        )

    obj_dir = layout.obj_dir(params.profile)
    obj_dir.mkdir(parents=True, exist_ok=True)

    sources = scan_sources(layout.src_dir)
    headers = scan_headers(layout.public_include_dir)
    include_paths = (layout.public_include_dir,)

    result = DependencyBuildResult(name=name, root=layout.root, include_dir=layout.public_include_dir)
    for source in sources:
        target = BuildTarget.create(source, obj_dir, include_paths)
        verdict, reason = check_staleness(target.source_path, target.object_path, headers)
        logger.debug("[%s] %s: %s", name, source.name, reason)

        if verdict is StalenessVerdict.MUST_RECOMPILE:
            log_unit(name, source.name)
            toolchain.compile(target.source_path, target.object_path, target.include_paths, params.profile_flags)
            result.compiled.append(source)
        else:
            log_unit(name, source.name, fresh=True)

        result.objects.append(target.object_path)

    return result
