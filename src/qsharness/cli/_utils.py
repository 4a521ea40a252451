# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Shared CLI utilities.

Helpers used across CLI commands for consistent output formatting.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

import click
from qsharness.result import ExecutionResult


def echo(msg: str, *, err: bool = False) -> None:
    """
    Print message to stdout or stderr.

    Parameters
    ----------
    msg : str
        Message to print.
    err : bool, default=False
        If True, print to stderr instead of stdout.
    """
    click.echo(msg, err=err)


def print_json(obj: Any) -> None:
    """Print object as formatted JSON; non-serializable values become strings."""
    click.echo(json.dumps(obj, indent=2, default=str, ensure_ascii=False))


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    title: str = "",
) -> None:
    """
    Print formatted ASCII table.

    Parameters
    ----------
    headers : sequence of str
        Column headers.
    rows : sequence of sequence
        Table rows. Each row should have same length as headers.
    title : str, optional
        Table title to display above the table.
    """
    if title:
        echo(f"\n{title}\n{'=' * len(title)}")

    if not rows:
        echo("(empty)")
        return

    widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(str(cell)))

    fmt = "  ".join(f"{{:<{w}}}" for w in widths)

    echo(fmt.format(*headers))
    echo(fmt.format(*["-" * w for w in widths]))
    for row in rows:
        echo(fmt.format(*[str(c) for c in row]))


def print_result(result: ExecutionResult) -> None:
    """Print messages and the state table of a result."""
    print_table(["#", "Message"], list(enumerate(result.messages)), title="Messages")
    print_table(
        ["State", "Real", "Imaginary", "Prob"],
        [
            (
                s.id,
                f"{s.amplitude_real:.6f}",
                f"{s.amplitude_imaginary:.6f}",
                f"{s.probability:.4f}",
            )
            for s in result.states
        ],
        title=f"State ({result.qubit_count} qubit(s))",
    )
