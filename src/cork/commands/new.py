"""`cork new` - create a project skeleton.

Layout created for `cork new hello`:

    hello/
        Cork.toml
        .gitignore
        include/headers.h
        src/main.c
        src/include/
        tests/test_main.c
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ..config.manifest import MANIFEST_FILENAME, validate_project_name
from ..errors import ConfigError, ProjectExistsError, ScaffoldError
from ..output import log_warning
from ..subprocess_utils import safe_run

logger = logging.getLogger(__name__)

MAIN_C = """\
#include <stdio.h>
#include "headers.h"

int main() {
    printf("Hello, Cork!\\n");
    return 0;
}
"""

HEADERS_H = """\
#ifndef HEADERS_H
#define HEADERS_H

void some_function(void);

#endif // HEADERS_H
"""

TEST_MAIN_C = """\
#include <stdio.h>
#include "headers.h"

int main() {
    printf("Running tests\\n");
    return 0;
}
"""

GITIGNORE = "build/\n"


def _toml_string(value: str) -> str:
    """Quote value as a TOML basic string."""
    escaped = []
    for ch in value:
        if ch in "\"\\":
            escaped.append("\\" + ch)
        elif ch < " " or ch == "\x7f":
            escaped.append(f"\\u{ord(ch):04x}")
        else:
            escaped.append(ch)
    return "\"" + "".join(escaped) + "\""


def render_manifest(name: str, version: str = "0.1.0") -> str:
    return f"[project]\nname = {_toml_string(name)}\nversion = {_toml_string(version)}\n\n[dependencies]\n"


def create_new_project(name: str, parent_dir: Optional[Path] = None, init_git: bool = True) -> Path:
    """Create a new project directory.

    Args:
        name: Directory to create (relative to parent_dir); its final
            component becomes the project name
        parent_dir: Where to create the project (defaults to cwd)
        init_git: Whether to run `git init` in the new project

    Returns:
        Path to the created project

    Raises:
        ProjectExistsError: If the destination already exists
        ScaffoldError: If the name is not a valid project name, files
            cannot be written or `git init` fails
    """
    project_dir = (parent_dir if parent_dir is not None else Path.cwd()) / name
    try:
        validate_project_name(project_dir.name)
    except ConfigError as e:
        raise ScaffoldError(f"cannot create project `{name}`: {e}") from e
    if project_dir.exists():
        raise ProjectExistsError(f"destination `{name}` already exists")

    try:
        (project_dir / "src" / "include").mkdir(parents=True)
        (project_dir / "include").mkdir()
        (project_dir / "tests").mkdir()

        (project_dir / "src" / "main.c").write_text(MAIN_C, encoding="utf-8")
        (project_dir / "include" / "headers.h").write_text(HEADERS_H, encoding="utf-8")
        (project_dir / "tests" / "test_main.c").write_text(TEST_MAIN_C, encoding="utf-8")
        (project_dir / MANIFEST_FILENAME).write_text(render_manifest(project_dir.name), encoding="utf-8")
        (project_dir / ".gitignore").write_text(GITIGNORE, encoding="utf-8")
    except OSError as e:
        raise ScaffoldError(f"failed to create project `{name}`: {e}") from e

    if init_git:
        _init_git(project_dir)

    return project_dir


def _init_git(project_dir: Path) -> None:
    git = shutil.which("git")
    if git is None:
        log_warning("git not found; skipping repository initialization")
        return

    try:
        result = safe_run([git, "init"], cwd=project_dir, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, text=True)
    except OSError as e:
        raise ScaffoldError(f"failed to initialize git repository: {e}") from e

    if result.returncode != 0:
        raise ScaffoldError(f"failed to initialize git repository:\n{result.stderr}")
    logger.debug("initialized git repository in %s", project_dir)
