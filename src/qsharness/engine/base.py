# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Interpreter engine contract.

An engine owns everything language specific: parsing, type checking,
lowering and simulation. The harness only talks to it through the
protocols below.

Engine-level failures are reported with :class:`EngineFailure`
subclasses carrying the engine's diagnostics. The runner translates them
into the harness's own :class:`~qsharness.errors.RunError` types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Protocol, Sequence, runtime_checkable

from qsharness.diagnostics import Diagnostic
from qsharness.sources import Source, SourceMap


if TYPE_CHECKING:
    from qsharness.observer import OutputReceiver


class EngineFailure(Exception):
    """
    Failure reported by an engine, with its diagnostics.

    Parameters
    ----------
    diagnostics : iterable of Diagnostic
        Diagnostics in the order the engine reported them.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics: list[Diagnostic] = list(diagnostics)
        summary = "; ".join(d.message for d in self.diagnostics[:3])
        if len(self.diagnostics) > 3:
            summary += f" ... and {len(self.diagnostics) - 3} more"
        super().__init__(summary)


class ContextConstructionError(EngineFailure):
    """Raised by :meth:`EngineProtocol.create_context` on compile/binding errors."""


class EvaluationError(EngineFailure):
    """Raised by :meth:`ContextProtocol.eval` on runtime errors."""


@dataclass(frozen=True)
class CompileUnit:
    """
    Output of :meth:`EngineProtocol.compile`.

    Parameters
    ----------
    sources : SourceMap
        Sources the unit was compiled from.
    errors : tuple of Diagnostic
        Compilation errors; empty on success.
    """

    sources: SourceMap
    errors: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def find_source(self, diagnostic: Diagnostic) -> Source | None:
        """Resolve a diagnostic to the source unit it originated from."""
        return self.sources.find_by_diagnostic(diagnostic)


@runtime_checkable
class ContextProtocol(Protocol):
    """A compiled program, bound and ready to evaluate."""

    def eval(self, receiver: OutputReceiver) -> Any:
        """
        Evaluate the program's entry point once.

        Parameters
        ----------
        receiver : OutputReceiver
            Receives messages and state dumps as they are produced.

        Returns
        -------
        Any
            The entry point's returned value (``None`` for unit).

        Raises
        ------
        EvaluationError
            If the program fails at runtime.
        """
        ...


@runtime_checkable
class EngineProtocol(Protocol):
    """
    Protocol defining the interpreter engine interface.

    Attributes
    ----------
    name : str
        Unique engine identifier (e.g., "qsharp").
    """

    name: str

    def create_context(self, sources: SourceMap, *, debug: bool) -> ContextProtocol:
        """
        Compile and bind sources into an evaluation context.

        Parameters
        ----------
        sources : SourceMap
            Program sources.
        debug : bool
            Enable debug instrumentation (stack traces on failure).

        Raises
        ------
        ContextConstructionError
            If the sources do not compile or bind.
        """
        ...

    def compile(
        self,
        sources: SourceMap,
        dependencies: Sequence[str] = (),
    ) -> CompileUnit:
        """
        Compile sources against the core package and ``dependencies``.

        Errors are returned in the unit, never raised.
        """
        ...
