# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Command-line interface.

Registered as the ``qsharness`` console script.
"""

from __future__ import annotations

import logging

import click
from qsharness.cli import commands


@click.group()
@click.option("--engine", help="Interpreter engine (default: QSHARNESS_ENGINE).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(package_name="qsharness")
@click.pass_context
def cli(ctx: click.Context, engine: str | None, verbose: bool) -> None:
    """Run Q# programs and capture their messages and final state."""
    ctx.ensure_object(dict)
    ctx.obj["engine"] = engine
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


commands.register(cli)


def main() -> None:
    """Run the ``qsharness`` CLI."""
    cli()


if __name__ == "__main__":
    main()
