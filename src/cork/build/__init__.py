"""
Build system components for cork.

This package provides:
- Build profiles and per-invocation build parameters
- Source and header discovery
- Timestamp-based staleness detection
- The toolchain boundary (compile/link)
- Dependency and project build orchestration
- The run driver
"""

from .build_context import BuildParams, BuildTarget
from .build_profiles import BuildProfile, ProfileFlags, get_profile
from .dependency_builder import DependencyBuildResult, build_dependency
from .orchestrator import BuildOrchestrator, BuildResult, build_project
from .runner import run_executable, run_project
from .staleness import StalenessVerdict, check_staleness, is_stale
from .toolchain import GccToolchain, IToolchain

__all__ = [
    "BuildOrchestrator",
    "BuildParams",
    "BuildProfile",
    "BuildResult",
    "BuildTarget",
    "DependencyBuildResult",
    "GccToolchain",
    "IToolchain",
    "ProfileFlags",
    "StalenessVerdict",
    "build_dependency",
    "build_project",
    "check_staleness",
    "get_profile",
    "is_stale",
    "run_executable",
    "run_project",
]
