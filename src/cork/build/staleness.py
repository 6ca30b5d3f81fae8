"""Timestamp-based staleness detection.

A unit must be recompiled when its object file is missing, or when the source
or any watched header is strictly newer than the object. The watched header
set is coarse: every header in every directory the unit can see, not just the
headers it includes. Touching an unrelated header therefore recompiles every
unit that can see its directory; no stale binary is ever produced.

Equal timestamps count as fresh. On filesystems with coarse mtime resolution
a header written in the same tick as the object is therefore missed.

Any timestamp that cannot be read forces a recompile.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class StalenessVerdict(Enum):
    """Outcome of a staleness check."""

    FRESH_ENOUGH = "fresh"
    MUST_RECOMPILE = "stale"

    def __bool__(self) -> bool:
        return self is StalenessVerdict.MUST_RECOMPILE


def _mtime_ns(path: Path) -> Optional[int]:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


def check_staleness(source: Path, obj: Path, watched_headers: Iterable[Path]) -> tuple[StalenessVerdict, str]:
    """Decide whether `source` must be recompiled into `obj`.

    Args:
        source: Source file
        obj: Object file produced from source
        watched_headers: Headers whose modification invalidates obj

    Returns:
        Tuple of (verdict, reason). The reason is a short human-readable
        explanation for verbose logs.
    """
    if not obj.exists():
        return StalenessVerdict.MUST_RECOMPILE, f"{obj.name} does not exist"

    obj_time = _mtime_ns(obj)
    if obj_time is None:
        return StalenessVerdict.MUST_RECOMPILE, f"cannot read timestamp of {obj}"

    src_time = _mtime_ns(source)
    if src_time is None:
        return StalenessVerdict.MUST_RECOMPILE, f"cannot read timestamp of {source}"

    if src_time > obj_time:
        return StalenessVerdict.MUST_RECOMPILE, f"{source.name} is newer than {obj.name}"

    for header in watched_headers:
        header_time = _mtime_ns(header)
        if header_time is None:
            return StalenessVerdict.MUST_RECOMPILE, f"cannot read timestamp of {header}"
        if header_time > obj_time:
            return StalenessVerdict.MUST_RECOMPILE, f"{header.name} is newer than {obj.name}"

    return StalenessVerdict.FRESH_ENOUGH, "up to date"


def is_stale(source: Path, obj: Path, watched_headers: Iterable[Path]) -> StalenessVerdict:
    """Return the staleness verdict for one unit (see check_staleness)."""
    verdict, reason = check_staleness(source, obj, watched_headers)
    logger.debug("%s: %s (%s)", source, verdict.value, reason)
    return verdict
