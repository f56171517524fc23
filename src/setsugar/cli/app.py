"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from setsugar.cli.interactive import InteractiveCli
from setsugar.config.settings import SWITCHES, TransformConfig, load_config
from setsugar.core.errors import SetSugarError
from setsugar.logging_utils import configure_logging
from setsugar.pipeline import desugar, run_lines

app = typer.Typer(
    name="setsugar",
    help="Desugar set-theory formulas into primitive first-order logic",
    add_completion=False,
)

OnlyOption = Annotated[
    list[str] | None,
    typer.Option("--only", help=f"Enable only these switches (comma separated): {', '.join(SWITCHES)}"),
]
SkipOption = Annotated[list[str] | None, typer.Option("--skip", help="Disable these switches (comma separated)")]


def _parse_subset(values: list[str] | None) -> set[str] | None:
    if values is None:
        return None

    names: set[str] = set()
    for raw in values:
        for part in raw.split(","):
            name = part.strip()
            if name:
                names.add(name)
    return names or None


def _build_config(only: list[str] | None, skip: list[str] | None) -> TransformConfig:
    try:
        return load_config(only=_parse_subset(only), skip=_parse_subset(skip))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        shell()


@app.command("translate")
def translate_command(
    formula: Annotated[str, typer.Argument(help="Formula in sugared notation")],
    only: OnlyOption = None,
    skip: SkipOption = None,
) -> None:
    """Desugar one formula and print the result."""

    configure_logging()
    config = _build_config(only, skip)
    logger.info("translate.start enabled={}", config.enabled())
    try:
        result = desugar(formula, config)
    except SetSugarError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(result)


@app.command()
def batch(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    only: OnlyOption = None,
    skip: SkipOption = None,
) -> None:
    """Desugar every formula in a file, one per line."""

    configure_logging()
    config = _build_config(only, skip)
    logger.info("batch.start file={} enabled={}", str(file), config.enabled())
    failed = 0
    with file.open(encoding="utf-8") as handle:
        for result in run_lines(handle, config, filename=str(file)):
            typer.echo(result.source)
            typer.echo(f"  {result.output}")
            if not result.ok:
                failed += 1
    logger.info("batch.done failed={}", failed)
    if failed:
        raise typer.Exit(code=1)


@app.command()
def shell(
    only: OnlyOption = None,
    skip: SkipOption = None,
) -> None:
    """Start the interactive shell."""

    configure_logging(profile="shell")
    InteractiveCli(_build_config(only, skip)).run()


@app.command()
def switches() -> None:
    """List the switches and their current values."""

    config = load_config()
    for name in SWITCHES:
        description = TransformConfig.model_fields[name].description or ""
        typer.echo(f"{name:<17} {'on ' if getattr(config, name) else 'off'}  {description}")
