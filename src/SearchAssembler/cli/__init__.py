"""CLI package for SearchAssembler command orchestration.

This package contains the CLI components, factored into interface
definitions, a runner and command implementations.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from SearchAssembler.cli.runner import CommandRunner
from SearchAssembler.cli.ui import cli


def main() -> None:
    """Run SearchAssembler CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
