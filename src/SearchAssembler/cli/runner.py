"""Command runner for coordinating CLI execution.

Manages logging configuration and error handling for command execution.
"""

from __future__ import annotations

import json

import click

from SearchAssembler.cli.commands import CompileCommand, TokenizeCommand
from SearchAssembler.config import AppConfig
from SearchAssembler.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, command creation, output and error
    handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_compile(self, action: str, *, as_json: bool = False) -> None:
        """Compile configured queries and print them.

        Args:
            action: The CLI command name (e.g., 'compile').
            as_json: Print a JSON list of ``{"name", "query"}`` objects
                instead of one query per line.

        Raises:
            click.Abort: When compilation fails.
        """
        self._configure(action)
        try:
            compiled = CompileCommand(self.config).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Compile failed: %s", e)
            raise click.Abort from e

        if as_json:
            payload = [{"name": item.name, "query": item.text} for item in compiled]
            click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        for item in compiled:
            click.echo(item.text)

    def run_tokenize(self, action: str, text: str, *, min_size: int | None = None) -> None:
        """Tokenize text and print the tokens.

        Raises:
            click.Abort: When tokenizing fails.
        """
        self._configure(action)
        try:
            tokens = TokenizeCommand(self.config, min_size=min_size).execute(text)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Tokenize failed: %s", e)
            raise click.Abort from e
        click.echo(tokens)
