# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Exception hierarchy.

All exceptions raised by qsharness inherit from :class:`QsHarnessError`,
allowing a single catch-all handler for library errors.

Hierarchy
---------
::

    QsHarnessError
    ├── RunError
    │   ├── ContextError
    │   └── ExecutionError
    ├── ObserverError
    └── EngineError
        ├── EngineNotFoundError
        └── EngineUnavailableError

Examples
--------
>>> from qsharness import run
>>> from qsharness.errors import ContextError, RunError
>>> try:
...     result = run("namespace Broken {")
... except ContextError as exc:
...     print(exc.kind.value, len(exc.diagnostics))
... except RunError:
...     print("program failed while running")
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable


if TYPE_CHECKING:
    from qsharness.diagnostics import Diagnostic


class QsHarnessError(Exception):
    """
    Base exception for all qsharness operations.

    Every public exception in qsharness is a subclass of this type, so
    ``except QsHarnessError`` is guaranteed to intercept any error
    originating from the harness.
    """


class ErrorKind(str, Enum):
    """Failure class of a run."""

    CONTEXT = "context error"
    EXECUTION = "execution error"


class RunError(QsHarnessError):
    """
    Raised when a program cannot be run to completion.

    Parameters
    ----------
    kind : ErrorKind
        Whether the failure happened while building the interpreter
        context (compile/binding) or while evaluating the program.
    diagnostics : iterable of Diagnostic, optional
        Diagnostics reported by the engine, in the order it reported them.
    """

    def __init__(
        self,
        kind: ErrorKind,
        diagnostics: Iterable[Diagnostic] = (),
    ) -> None:
        self.kind = kind
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)
        message = kind.value
        if self.diagnostics:
            message = f"{message}: {self.diagnostics[0].message}"
            if len(self.diagnostics) > 1:
                message += f" (and {len(self.diagnostics) - 1} more)"
        super().__init__(message)


class ContextError(RunError):
    """Raised when the interpreter context cannot be constructed."""

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        super().__init__(ErrorKind.CONTEXT, diagnostics)


class ExecutionError(RunError):
    """Raised when evaluation of a valid program fails at runtime."""

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        super().__init__(ErrorKind.EXECUTION, diagnostics)


class ObserverError(QsHarnessError):
    """Raised when engine output cannot be recorded."""


class EngineError(QsHarnessError):
    """Base exception for engine discovery and loading."""


class EngineNotFoundError(EngineError):
    """
    Raised when no engine is registered under a name.

    Parameters
    ----------
    name : str
        Requested engine name.
    details : str, optional
        Extra lines (available engines, load errors) appended to the
        message.
    """

    def __init__(self, name: str, details: str = "") -> None:
        self.name = name
        message = f"Engine not found: {name}"
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class EngineUnavailableError(EngineError):
    """Raised when the library backing an engine is not importable."""
