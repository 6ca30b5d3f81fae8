"""`cork clean` - remove the build directory.

Every file under build/ is measured before the directory is deleted, so the
command can report how much was freed.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import CleanError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanSummary:
    """What `cork clean` removed."""

    existed: bool
    file_count: int = 0
    total_bytes: int = 0

    @property
    def size_mib(self) -> float:
        return self.total_bytes / (1024 * 1024)

    def format(self) -> str:
        if not self.existed:
            return "Build directory does not exist. Nothing to clean."
        return f"Removed {self.file_count} files, {self.size_mib:.1f}MiB total"


def measure_directory(directory: Path) -> tuple[int, int]:
    """Count files and bytes under directory.

    Files that vanish or cannot be stat'ed while walking are skipped.

    Returns:
        Tuple of (file_count, total_bytes)
    """
    file_count = 0
    total_bytes = 0
    for dirpath, _, filenames in os.walk(directory):
        for filename in filenames:
            filepath = Path(dirpath) / filename
            try:
                total_bytes += filepath.stat().st_size
            except OSError as e:
                logger.warning("Failed to get metadata for %s: %s", filepath, e)
                continue
            file_count += 1
    return file_count, total_bytes


def clean_project(project_dir: Optional[Path] = None) -> CleanSummary:
    """Delete the project's build directory.

    Args:
        project_dir: Project root (defaults to cwd)

    Returns:
        CleanSummary describing what was removed

    Raises:
        CleanError: If the directory cannot be removed
    """
    build_dir = (project_dir if project_dir is not None else Path.cwd()) / "build"
    if not build_dir.exists():
        return CleanSummary(existed=False)

    file_count, total_bytes = measure_directory(build_dir)
    try:
        shutil.rmtree(build_dir)
    except OSError as e:
        raise CleanError(f"failed to clean build directory: {e}") from e

    return CleanSummary(existed=True, file_count=file_count, total_bytes=total_bytes)
