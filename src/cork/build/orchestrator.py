"""
Build orchestration for cork projects.

This module drives a complete incremental build of the project in one
directory:

1. Load Cork.toml (fail fast if absent)
2. Create build/<profile>/obj
3. Build every declared dependency, collecting its objects and public headers
4. Scan src/ for sources (at least one is required)
5. Recompile the project's stale sources
6. Relink when the executable is missing or any object was recompiled

Link order is every dependency's objects, in declaration order, followed by
the project's own objects. Running a build twice on an unchanged tree
performs no compiler or linker invocations the second time.

Example usage:
    orchestrator = BuildOrchestrator(Path("."))
    result = orchestrator.build(BuildProfile.DEBUG)
    executable = result.executable  # build/debug/<name>
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config.manifest import Manifest, load_manifest
from ..errors import ConfigError, SourceDiscoveryError
from ..output import TimedLogger, log, log_build_complete, log_detail, log_phase, log_unit, set_verbose
from .build_context import BuildParams, BuildTarget
from .build_profiles import BuildProfile, print_profile_banner
from .dependency_builder import DependencyBuildResult, build_dependency
from .source_scanner import ProjectLayout, scan_headers, scan_sources
from .staleness import StalenessVerdict, check_staleness
from .toolchain import GccToolchain, IToolchain

logger = logging.getLogger(__name__)

TOTAL_PHASES = 3


@dataclass
class BuildResult:
    """Result of a complete build.

    Attributes:
        executable: Path to the linked executable
        objects: Every object passed (or that would be passed) to the linker,
            in link order
        compiled: Sources compiled during this build, dependencies included
        linked: Whether the linker ran
        build_time: Wall time of the build in seconds
    """

    executable: Path
    objects: list[Path] = field(default_factory=list)
    compiled: list[Path] = field(default_factory=list)
    linked: bool = False
    build_time: float = 0.0

    @property
    def up_to_date(self) -> bool:
        return not self.compiled and not self.linked


class BuildOrchestrator:
    """Orchestrates the incremental build of one project and its dependencies."""

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        toolchain: Optional[IToolchain] = None,
        verbose: bool = False,
    ):
        """
        Args:
            project_dir: Project root containing Cork.toml (defaults to cwd)
            toolchain: Toolchain to compile and link with (defaults to GccToolchain)
            verbose: Turn on verbose progress output
        """
        self.layout = ProjectLayout(Path(project_dir) if project_dir is not None else Path.cwd())
        self.toolchain = toolchain if toolchain is not None else GccToolchain()
        if verbose:
            set_verbose(True)

    def load_manifest(self) -> Manifest:
        """Load the project's manifest.

        Raises:
            ConfigError: If Cork.toml is missing or malformed
        """
        manifest_path = self.layout.manifest_path
        if not manifest_path.is_file():
            raise ConfigError(f"could not find `{manifest_path.name}` in `{self.layout.root.absolute()}`")
        return load_manifest(manifest_path)

    def build(self, profile: BuildProfile = BuildProfile.DEBUG) -> BuildResult:
        """Build the project incrementally.

        Args:
            profile: Build profile to use

        Returns:
            BuildResult describing what was done

        Raises:
            ConfigError: If Cork.toml is missing or malformed
            DependencyError: If a dependency cannot be built
            SourceDiscoveryError: If a source/header directory is unreadable
                or src/ holds no sources
            ToolchainError: If a compile fails
            LinkError: If the link fails
        """
        start_time = time.time()
        params = BuildParams.create(profile)
        layout = self.layout

        manifest = self.load_manifest()
        log(f"Building {manifest.name} v{manifest.version} ({profile})")
        print_profile_banner(profile, compiler=self.toolchain.describe())

        obj_dir = layout.obj_dir(profile)
        obj_dir.mkdir(parents=True, exist_ok=True)
        executable = layout.executable_path(profile, manifest.name)
        result = BuildResult(executable=executable)

        # Phase 1: dependencies, in declaration order
        include_paths = [layout.public_include_dir, layout.private_include_dir]
        with TimedLogger("Building dependencies", phase=(1, TOTAL_PHASES)):
            if not manifest.dependencies:
                log_detail("No dependencies", verbose_only=True)
            for dep_name, dependency in manifest.dependencies.items():
                dep_result = build_dependency(dep_name, dependency, params, self.toolchain, layout.root)
                self._merge_dependency(result, dep_result)
                include_paths.append(dep_result.include_dir)

        # Phase 2: own sources
        sources = scan_sources(layout.src_dir)
        if not sources:
            raise SourceDiscoveryError(f"no source files found in {layout.src_dir}")

        # src/include is optional; include/ is not
        watched_headers = scan_headers(layout.public_include_dir)
        if layout.private_include_dir.is_dir():
            watched_headers += scan_headers(layout.private_include_dir)

        with TimedLogger(f"Compiling {manifest.name}", phase=(2, TOTAL_PHASES)):
            for source in sources:
                target = BuildTarget.create(source, obj_dir, include_paths)
                self._compile_if_stale(manifest.name, target, watched_headers, params, result)
                result.objects.append(target.object_path)

        # Phase 3: link
        needs_link = bool(result.compiled) or not executable.is_file()
        if needs_link:
            with TimedLogger(f"Linking {executable}", phase=(3, TOTAL_PHASES)) as timed:
                timed.detail(f"{len(result.objects)} object file(s)")
                self.toolchain.link(result.objects, executable, params.profile_flags)
            result.linked = True
        else:
            log_phase(3, TOTAL_PHASES, f"{executable} is up to date", verbose_only=True)

        result.build_time = time.time() - start_time
        log_build_complete(result.build_time, executable)
        return result

    def _merge_dependency(self, result: BuildResult, dep_result: DependencyBuildResult) -> None:
        result.objects.extend(dep_result.objects)
        result.compiled.extend(dep_result.compiled)
        logger.debug(
            "dependency %s: %d object(s), %d compiled", dep_result.name, len(dep_result.objects), len(dep_result.compiled)
        )

    def _compile_if_stale(
        self,
        owner: str,
        target: BuildTarget,
        watched_headers: list[Path],
        params: BuildParams,
        result: BuildResult,
    ) -> None:
        verdict, reason = check_staleness(target.source_path, target.object_path, watched_headers)
        logger.debug("%s: %s", target.source_path.name, reason)

        if verdict is StalenessVerdict.FRESH_ENOUGH:
            log_unit(owner, target.source_path.name, fresh=True)
            return

        log_unit(owner, target.source_path.name)
        self.toolchain.compile(target.source_path, target.object_path, target.include_paths, params.profile_flags)
        result.compiled.append(target.source_path)


def build_project(
    profile: BuildProfile = BuildProfile.DEBUG,
    project_dir: Optional[Path] = None,
    toolchain: Optional[IToolchain] = None,
    verbose: bool = False,
) -> Path:
    """Build the project and return the path to its executable."""
    return BuildOrchestrator(project_dir, toolchain=toolchain, verbose=verbose).build(profile).executable
