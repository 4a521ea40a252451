# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Program CLI commands.

Commands for running Q# programs, compile-checking them, and listing the
available engines.
"""

from __future__ import annotations

import dataclasses
from typing import TextIO

import click
from qsharness.cli._utils import echo, print_json, print_result


def register(cli: click.Group) -> None:
    """Register program commands with CLI."""
    cli.add_command(run_command)
    cli.add_command(check_command)
    cli.add_command(engines_command)


def _config_from_ctx(ctx: click.Context, **overrides):
    """Config for this invocation, with CLI overrides applied."""
    from qsharness.config import get_config

    cfg = get_config()
    engine = ctx.obj.get("engine") if ctx.obj else None
    if engine:
        overrides["engine"] = engine
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def _engine_for(cfg):
    from qsharness.engine.registry import get_engine
    from qsharness.errors import EngineError

    try:
        return get_engine(cfg.engine)
    except EngineError as e:
        raise click.ClickException(str(e)) from e


@click.command("run")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
@click.option("--no-debug", is_flag=True, help="Build the context without debug info.")
@click.pass_context
def run_command(
    ctx: click.Context,
    source: TextIO,
    fmt: str,
    no_debug: bool,
) -> None:
    """
    Run a Q# program and print its messages and final state.

    SOURCE is a file path, or - to read from stdin.

    \b
    Examples:
        qsharness run bell.qs
        qsharness run bell.qs --format json > result.json
    """
    from qsharness.errors import EngineError, RunError
    from qsharness.runner import run

    overrides = {}
    if no_debug:
        overrides["debug"] = False
    if fmt == "json":
        # Keep stdout parseable.
        overrides["echo_value"] = False
    cfg = _config_from_ctx(ctx, **overrides)

    try:
        result = run(source.read(), engine=_engine_for(cfg), config=cfg)
    except RunError as e:
        raise click.ClickException(str(e)) from e
    except EngineError as e:
        raise click.ClickException(str(e)) from e

    if fmt == "json":
        print_json(result.to_dict())
    else:
        print_result(result)


@click.command("check")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_context
def check_command(ctx: click.Context, source: TextIO) -> None:
    """Compile a Q# program without running it."""
    from qsharness.compiler import compile_source
    from qsharness.errors import EngineError

    cfg = _config_from_ctx(ctx)
    try:
        errors = compile_source(source.read(), engine=_engine_for(cfg), config=cfg)
    except EngineError as e:
        raise click.ClickException(str(e)) from e

    if errors:
        raise click.ClickException(f"{len(errors)} compilation error(s)")
    echo("OK")


@click.command("engines")
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
def engines_command(fmt: str) -> None:
    """List interpreter engines, loading each to report failures."""
    from qsharness.engine.registry import engine_load_errors, load_engines

    names = sorted(load_engines())
    errors = engine_load_errors()

    if fmt == "json":
        print_json({"engines": names, "errors": errors})
        return

    for name in names:
        echo(name)
    for name, err in sorted(errors.items()):
        echo(f"failed: {name}: {err}", err=True)
