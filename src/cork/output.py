"""
Progress output for cork builds.

Lines are stamped with the time since the clock was started (MM:SS.cc) so a
slow compile or link stands out:

    00:00.01 Building mathproj v0.1.0 (debug)
    00:00.01 [1/3] Building dependencies...
    00:00.02       [mathlib] add.c
    00:00.10 [2/3] Compiling mathproj...
    00:00.18 [3/3] Linking build/debug/mathproj...
    00:00.21 Finished build/debug/mathproj in 0.21s

Lines marked verbose_only (and units that were up to date) are dropped unless
set_verbose(True) was called. Diagnostics that are not progress belong in
the logging module instead.
"""

import sys
import time
from pathlib import Path
from typing import Optional, TextIO

_clock_start: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose = False


def start_clock(stream: Optional[TextIO] = None) -> None:
    """Restart the elapsed-time clock, optionally redirecting output to stream."""
    global _clock_start, _output_stream
    _clock_start = time.monotonic()
    if stream is not None:
        _output_stream = stream


def set_verbose(verbose: bool) -> None:
    global _verbose
    _verbose = verbose


def elapsed_seconds() -> float:
    if _clock_start is None:
        start_clock()
    return time.monotonic() - _clock_start  # type: ignore[operator]


def timestamp() -> str:
    minutes, seconds = divmod(elapsed_seconds(), 60)
    return f"{int(minutes):02d}:{seconds:05.2f}"


def _emit(text: str, verbose_only: bool = False) -> None:
    if verbose_only and not _verbose:
        return
    # sys.stdout is looked up per call
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(f"{timestamp()} {text}\n")
    stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    _emit(message, verbose_only)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """Log the start of build phase `phase` of `total` as `[N/M] message`."""
    _emit(f"[{phase}/{total}] {message}", verbose_only)


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    _emit(" " * indent + message, verbose_only)


def log_unit(owner: str, filename: str, fresh: bool = False, verbose_only: bool = False) -> None:
    """
    Log one translation unit as `[owner] filename`.

    Args:
        owner: Name of the project or dependency that owns the unit
        filename: Source file name
        fresh: The unit was up to date; shown only in verbose mode, with a
            `(fresh)` suffix
        verbose_only: Show only in verbose mode
    """
    text = f"[{owner}] {filename}" + (" (fresh)" if fresh else "")
    log_detail(text, verbose_only=verbose_only or fresh)


def log_build_complete(build_time: float, executable: Path, verbose_only: bool = False) -> None:
    _emit(f"Finished {executable} in {build_time:.2f}s", verbose_only)


def log_warning(message: str) -> None:
    _emit(f"WARNING: {message}")


class TimedLogger:
    """
    Announce an operation on entry and, in verbose mode, its duration on exit.

    Usage:
        with TimedLogger("Linking app", phase=(3, 3)) as timed:
            timed.detail("4 object(s)")
            toolchain.link(...)

    Nothing is logged on exit when the block raises; the error is reported by
    whoever handles it.
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self._started = 0.0

    def __enter__(self) -> "TimedLogger":
        self._started = time.monotonic()
        heading = f"{self.operation}..."
        if self.phase is None:
            log(heading, self.verbose_only)
        else:
            log_phase(*self.phase, heading, verbose_only=self.verbose_only)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            log_detail(f"Done ({time.monotonic() - self._started:.2f}s)", verbose_only=True)

    def detail(self, message: str) -> None:
        log_detail(message, verbose_only=self.verbose_only)
