"""Build profiles and the toolchain flags each one contributes.

One profile is chosen per invocation (`--release` selects RELEASE) and is
never mixed within a build. The profile decides:

- the output directory: build/debug or build/release
- extra compile flags: release adds -O3, debug adds nothing
- extra link flags: none for either profile

Orchestration code never looks inside ProfileFlags; it hands them to the
toolchain, which appends them to its command lines.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BuildProfile(Enum):
    DEBUG = "debug"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_release_flag(cls, release: bool) -> "BuildProfile":
        return cls.RELEASE if release else cls.DEBUG


@dataclass(frozen=True)
class ProfileFlags:
    """Toolchain flags for one profile.

    Attributes:
        description: One-line summary shown in CLI help
        compile_flags: Appended to every compile command
        link_flags: Appended to the link command
    """

    description: str
    compile_flags: tuple[str, ...] = ()
    link_flags: tuple[str, ...] = ()


PROFILES: dict[BuildProfile, ProfileFlags] = {
    BuildProfile.DEBUG: ProfileFlags("Unoptimized development build (default)"),
    BuildProfile.RELEASE: ProfileFlags("Optimized build", compile_flags=("-O3",)),
}


def get_profile(profile: BuildProfile) -> ProfileFlags:
    return PROFILES[profile]


def format_profile_banner(profile: BuildProfile, compiler: Optional[str] = None) -> str:
    """Render `PROFILE=<name>` plus `COMPILER=<cmd>` when a compiler is given."""
    banner = f"PROFILE={profile}"
    return f"{banner} COMPILER={compiler}" if compiler else banner


def print_profile_banner(profile: BuildProfile, compiler: Optional[str] = None) -> None:
    """Show the profile banner in verbose mode."""
    from ..output import log

    log(format_profile_banner(profile, compiler=compiler), verbose_only=True)
