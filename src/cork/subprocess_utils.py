"""Process spawning for the toolchain and for built programs.

Everything cork runs goes through safe_run. A compiler must never block on
the terminal, so stdin defaults to DEVNULL; `cork run` passes stdin=None to
give the program the user's terminal. On Windows compiler invocations are
started without a console window.
"""

import logging
import subprocess
import sys
from typing import Any, Sequence

logger = logging.getLogger(__name__)


def get_subprocess_creation_flags() -> int:
    """CREATE_NO_WINDOW on Windows, 0 elsewhere."""
    return subprocess.CREATE_NO_WINDOW if sys.platform == "win32" else 0


def format_command(cmd: Sequence[str]) -> str:
    """Render a command line for logs and error messages."""
    return subprocess.list2cmdline(list(cmd)) if sys.platform == "win32" else " ".join(cmd)


def safe_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """subprocess.run with cork's defaults applied.

    Caller-supplied creationflags are OR'd with the platform flags; stdin is
    DEVNULL unless the caller passes it (None inherits the parent's).

    Raises:
        OSError: If the executable cannot be spawned
    """
    platform_flags = get_subprocess_creation_flags()
    creationflags = kwargs.pop("creationflags", 0) | platform_flags
    if creationflags:
        kwargs["creationflags"] = creationflags
    kwargs.setdefault("stdin", subprocess.DEVNULL)

    logger.debug("exec: %s", format_command(cmd))
    return subprocess.run(cmd, **kwargs)
