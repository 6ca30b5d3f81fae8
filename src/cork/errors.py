"""Exception hierarchy for cork.

Every predictable failure (missing manifest, missing sources, compiler errors,
a failing program under `cork run`) is raised as a subclass of CorkError so the
CLI can report it and exit non-zero instead of printing a traceback.

    CorkError
    ├── BuildError
    │   ├── ConfigError
    │   ├── DependencyError
    │   ├── SourceDiscoveryError
    │   └── ToolchainError
    │       └── LinkError
    ├── RunError
    ├── ScaffoldError
    │   └── ProjectExistsError
    └── CleanError
"""

from typing import Optional


class CorkError(Exception):
    """Base class for all cork errors."""

    pass


class BuildError(CorkError):
    """Raised when a build cannot be completed."""

    pass


class ConfigError(BuildError):
    """Raised when Cork.toml is missing or malformed."""

    pass


class SourceDiscoveryError(BuildError):
    """Raised when a source/header directory is unreadable or no sources exist."""

    pass


class DependencyError(BuildError):
    """Raised when a declared local dependency cannot be built.

    Attributes:
        dependency: Name of the dependency as declared in the manifest
        cause: The underlying error
    """

    def __init__(self, dependency: str, cause: BaseException):
        self.dependency = dependency
        self.cause = cause
        super().__init__(f"dependency `{dependency}`: {cause}")


class ToolchainError(BuildError):
    """Raised when the compiler or linker cannot be spawned or exits non-zero.

    Attributes:
        phase: "compile" or "link"
        unit: The source file (compile) or output file (link) being produced
        diagnostics: Captured stderr of the toolchain process, verbatim
    """

    def __init__(self, phase: str, unit: str, diagnostics: str):
        self.phase = phase
        self.unit = unit
        self.diagnostics = diagnostics
        message = f"{phase} failed for {unit}"
        if diagnostics:
            message += f":\n{diagnostics}"
        super().__init__(message)


class LinkError(ToolchainError):
    """Raised when the final link step fails."""

    def __init__(self, unit: str, diagnostics: str):
        super().__init__("link", unit, diagnostics)


class RunError(CorkError):
    """Raised when the built executable cannot be started or does not succeed.

    Attributes:
        exit_code: Exit status of the program, or -1 when none is available
            (spawn failure or termination by a signal)
        signal: Signal number that terminated the program, if any
    """

    NO_EXIT_CODE = -1

    def __init__(self, exit_code: int, signal: Optional[int] = None, message: Optional[str] = None):
        self.exit_code = exit_code
        self.signal = signal
        if message is None:
            if signal is not None:
                message = f"program terminated by signal {signal}"
            else:
                message = f"program exited with code {exit_code}"
        super().__init__(message)


class ScaffoldError(CorkError):
    """Raised when a new project cannot be created."""

    pass


class ProjectExistsError(ScaffoldError):
    """Raised when the destination of `cork new` already exists."""

    pass


class CleanError(CorkError):
    """Raised when the build directory cannot be removed."""

    pass
