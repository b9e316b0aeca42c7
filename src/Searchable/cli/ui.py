"""Click CLI interface definitions."""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from Searchable.cli.runner import CommandRunner
from Searchable.config import load_config_with_defaults


@click.group(help="Searchable: ranked fuzzy text search compiled to SQL.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="YAML config merged over the bundled defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading config, so
    ``path_env`` overrides can live there.
    """
    load_dotenv()
    ctx.obj = CommandRunner(load_config_with_defaults(config_path))


@cli.command("compile")
@click.argument("model_file", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.argument("terms")
@click.option("--limit", type=int, default=None, help="Maximum rows (default from config).")
@click.pass_context
def compile_cmd(ctx: click.Context, model_file: Path, terms: str, limit: int | None) -> None:
    """Print the SQL and bindings a search compiles to."""
    runner: CommandRunner = ctx.obj
    runner.run_compile(model_file, terms, limit=limit, action=ctx.command.name)


@cli.command("search")
@click.argument("model_file", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.argument("terms")
@click.option("--limit", type=int, default=None, help="Maximum rows (default from config).")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
@click.pass_context
def search_cmd(ctx: click.Context, model_file: Path, terms: str, limit: int | None, output_format: str) -> None:
    """Run a search against the model's SQLite connection."""
    runner: CommandRunner = ctx.obj
    runner.run_search(model_file, terms, limit=limit, output_format=output_format, action=ctx.command.name)
