"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from SearchAssembler.cli.runner import CommandRunner
from SearchAssembler.config import load_config


@click.group(help="SearchAssembler: compile search queries and autocomplete tokens.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    ctx.obj = load_config(config_path)


@cli.command("compile")
@click.option("--json", "as_json", is_flag=True, help="Print queries as a JSON list.")
@click.pass_context
def compile_cmd(ctx: click.Context, as_json: bool) -> None:
    """Compile the queries from the YAML config into query strings."""
    CommandRunner(ctx.obj).run_compile(action=ctx.command.name, as_json=as_json)


@cli.command("tokenize")
@click.argument("text")
@click.option(
    "--min-size",
    type=click.IntRange(min=1),
    default=None,
    help="Minimum token length (defaults to tokenizer.min_size).",
)
@click.pass_context
def tokenize_cmd(ctx: click.Context, text: str, min_size: int | None) -> None:
    """Print autocomplete tokens for TEXT."""
    CommandRunner(ctx.obj).run_tokenize(action=ctx.command.name, text=text, min_size=min_size)
