# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Diagnostic records and output sinks.

A :class:`Diagnostic` is the structured form of a compiler or runtime
error reported by an engine. Sinks receive the text the harness emits
while running a program: diagnostics on the error channel and the
program's returned value on the output channel.

Sinks
-----
- :class:`ConsoleSink` writes to the process streams via ``click.echo``.
- :class:`CollectingSink` keeps everything in memory, so callers can
  inspect what was emitted without capturing process streams.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import click


@dataclass(frozen=True)
class SourceSpan:
    """
    Location of a diagnostic inside a source unit.

    Parameters
    ----------
    source_name : str
        Name of the source unit (the virtual file name).
    line : int
        1-based line number.
    column : int
        1-based column number.
    """

    source_name: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.source_name}:{self.line}:{self.column}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "source_name": self.source_name,
            "line": self.line,
            "column": self.column,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SourceSpan:
        """Create from dictionary."""
        return cls(
            source_name=str(d.get("source_name", "")),
            line=int(d.get("line", 0)),
            column=int(d.get("column", 0)),
        )


@dataclass(frozen=True)
class Diagnostic:
    """
    Compiler- or runtime-produced description of an error.

    Parameters
    ----------
    message : str
        Human-readable error message.
    span : SourceSpan, optional
        Originating source location, when the engine reported one.
    stack_trace : str, optional
        Call stack at the point of a runtime failure.
    code : str, optional
        Engine error code (e.g. ``"Qsc.Parse.Token"``).
    """

    message: str
    span: SourceSpan | None = None
    stack_trace: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        d: dict[str, Any] = {"message": self.message}
        if self.span is not None:
            d["span"] = self.span.to_dict()
        if self.stack_trace:
            d["stack_trace"] = self.stack_trace
        if self.code:
            d["code"] = self.code
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Diagnostic:
        """Create from dictionary."""
        span = None
        if d.get("span"):
            span = SourceSpan.from_dict(d["span"])
        return cls(
            message=str(d.get("message", "")),
            span=span,
            stack_trace=d.get("stack_trace"),
            code=d.get("code"),
        )


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver for text emitted while running a program."""

    def error(self, text: str) -> None:
        """Emit text on the error channel."""
        ...

    def output(self, text: str) -> None:
        """Emit text on the side output channel."""
        ...


class ConsoleSink:
    """Sink writing errors to stderr and output to stdout."""

    def error(self, text: str) -> None:
        click.echo(text, err=True)

    def output(self, text: str) -> None:
        click.echo(text)


@dataclass
class CollectingSink:
    """Sink that records emitted text in order, per channel."""

    errors: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)

    def error(self, text: str) -> None:
        self.errors.append(text)

    def output(self, text: str) -> None:
        self.outputs.append(text)
