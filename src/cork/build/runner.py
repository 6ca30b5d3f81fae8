"""Run Driver: build the project, then execute the result."""

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..errors import RunError
from ..output import log
from ..subprocess_utils import safe_run
from .build_profiles import BuildProfile
from .orchestrator import BuildOrchestrator
from .toolchain import IToolchain

logger = logging.getLogger(__name__)


def run_executable(executable: Path, args: Sequence[str] = ()) -> None:
    """Run a built program with the terminal's stdin, stdout and stderr.

    Raises:
        RunError: If the program cannot be spawned, exits non-zero, or is
            terminated by a signal
    """
    cmd = [str(executable.absolute()), *args]
    log(f"Running `{' '.join([str(executable), *args])}`")
    try:
        completed = safe_run(cmd, stdin=None)
    except OSError as e:
        raise RunError(RunError.NO_EXIT_CODE, message=f"failed to run {executable}: {e}") from e

    returncode = completed.returncode
    if returncode < 0:
        # POSIX: killed by signal -returncode
        raise RunError(RunError.NO_EXIT_CODE, signal=-returncode)
    if returncode != 0:
        raise RunError(returncode)
    logger.debug("%s exited with code 0", executable)


def run_project(
    profile: BuildProfile = BuildProfile.DEBUG,
    project_dir: Optional[Path] = None,
    args: Sequence[str] = (),
    toolchain: Optional[IToolchain] = None,
    verbose: bool = False,
) -> None:
    """Build the project if needed and run its executable.

    Raises:
        BuildError: If the build fails
        RunError: If the program fails (see run_executable)
    """
    orchestrator = BuildOrchestrator(project_dir, toolchain=toolchain, verbose=verbose)
    result = orchestrator.build(profile)
    run_executable(result.executable, args)
