"""Command implementations for the cork CLI.

This package contains the commands that are not part of the build engine
itself: project scaffolding and cleaning.
"""

from cork.commands.clean import CleanSummary, clean_project
from cork.commands.new import create_new_project

__all__ = ["CleanSummary", "clean_project", "create_new_project"]
