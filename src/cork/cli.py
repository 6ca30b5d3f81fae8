"""
Command-line interface for cork.

This module provides the `cork` CLI tool for building C projects.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

from cork import __version__
from cork.build import BuildOrchestrator, BuildProfile, get_profile, run_project
from cork.commands import clean_project, create_new_project
from cork.errors import CorkError, RunError
from cork.output import set_verbose, start_clock

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
RELEASE_HELP = f"Build with the release profile: {get_profile(BuildProfile.RELEASE).description.lower()}"


@dataclass
class NewArgs:
    """Arguments for the new command."""

    name: str
    parent_dir: Path
    verbose: bool = False


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    project_dir: Path
    release: bool = False
    verbose: bool = False


@dataclass
class RunArgs:
    """Arguments for the run command."""

    project_dir: Path
    release: bool = False
    program_args: list[str] = field(default_factory=list)
    verbose: bool = False


@dataclass
class CleanArgs:
    """Arguments for the clean command."""

    project_dir: Path
    verbose: bool = False


def setup_logging(verbose: bool) -> None:
    """Send library log records to stderr; DEBUG when verbose."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _status(label: str, message: str) -> None:
    console.print(Text.assemble((f"{label:>12}", "bold green"), " ", message), highlight=False)


def _error(message: str) -> None:
    err_console.print(Text.assemble(("error", "bold red"), ": ", message), highlight=False)


def new_command(args: NewArgs) -> int:
    """Create a new C project.

    Examples:
        cork new hello
    """
    create_new_project(args.name, parent_dir=args.parent_dir)
    _status("Creating", f"project `{args.name}`")
    return 0


def build_command(args: BuildArgs) -> int:
    """Build the C project.

    Examples:
        cork build              # Debug build
        cork build --release    # Optimized build
    """
    orchestrator = BuildOrchestrator(args.project_dir, verbose=args.verbose)
    result = orchestrator.build(BuildProfile.from_release_flag(args.release))
    status = "Fresh" if result.up_to_date else "Finished"
    _status(status, str(result.executable))
    return 0


def run_command(args: RunArgs) -> int:
    """Build and run the C project.

    Examples:
        cork run
        cork run --release -- arg1 arg2
    """
    run_project(
        BuildProfile.from_release_flag(args.release),
        project_dir=args.project_dir,
        args=args.program_args,
        verbose=args.verbose,
    )
    return 0


def clean_command(args: CleanArgs) -> int:
    """Remove the build directory."""
    summary = clean_project(args.project_dir)
    console.print(summary.format(), highlight=False)
    return 0


def _report_error(error: CorkError) -> int:
    _error(str(error))
    if isinstance(error, RunError) and error.exit_code > 0:
        return error.exit_code
    return 1


def _program_args(raw: list[str]) -> list[str]:
    if raw and raw[0] == "--":
        return raw[1:]
    return raw


def _dispatch(parsed_args: argparse.Namespace, project_dir: Path, verbose: bool) -> int:
    handler = parsed_args.handler
    if handler == "new":
        return new_command(NewArgs(name=parsed_args.name, parent_dir=project_dir, verbose=verbose))
    if handler == "build":
        return build_command(BuildArgs(project_dir=project_dir, release=parsed_args.release, verbose=verbose))
    if handler == "run":
        return run_command(
            RunArgs(
                project_dir=project_dir,
                release=parsed_args.release,
                program_args=_program_args(parsed_args.program_args),
                verbose=verbose,
            )
        )
    return clean_command(CleanArgs(project_dir=project_dir, verbose=verbose))


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cork",
        description="A build tool for C projects",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cork {__version__}",
    )
    parser.add_argument(
        "-C",
        "--project-dir",
        type=Path,
        default=None,
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    new_parser = subparsers.add_parser("new", help="Creates a new C project")
    new_parser.add_argument("name", help="Name of the project directory to create")
    new_parser.set_defaults(handler="new")

    build_parser = subparsers.add_parser("build", aliases=["b"], help="Builds the C project")
    build_parser.add_argument("--release", action="store_true", help=RELEASE_HELP)
    build_parser.set_defaults(handler="build")

    run_parser = subparsers.add_parser("run", aliases=["r"], help="Builds and runs the C project")
    run_parser.add_argument("--release", action="store_true", help=RELEASE_HELP)
    run_parser.add_argument(
        "program_args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the program (after --)",
    )
    run_parser.set_defaults(handler="run")

    clean_parser = subparsers.add_parser("clean", help="Cleans the build directory")
    clean_parser.set_defaults(handler="clean")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """cork - build tool for C projects."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    start_clock()
    verbose = parsed_args.verbose
    set_verbose(verbose)
    setup_logging(verbose)

    project_dir = parsed_args.project_dir if parsed_args.project_dir is not None else Path.cwd()
    if not project_dir.is_dir():
        _error(f"not a directory: {project_dir}")
        sys.exit(2)

    try:
        exit_code = _dispatch(parsed_args, project_dir, verbose)
    except CorkError as e:
        exit_code = _report_error(e)
    except KeyboardInterrupt:
        err_console.print("[bold yellow]interrupted[/bold yellow]")
        exit_code = 130  # Standard exit code for SIGINT

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
