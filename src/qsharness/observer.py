# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Output observer.

Engines report a program's side effects through the
:class:`OutputReceiver` interface while it runs. The harness implements it
once, in :class:`ExecutionRecorder`, which turns those callbacks into an
:class:`~qsharness.result.ExecutionResult`.

The recorder is handed to exactly one evaluation and must not be shared
with anything else while that evaluation runs.
"""

from __future__ import annotations

import logging
import operator
from typing import Iterable, Protocol, runtime_checkable

from qsharness.errors import ObserverError
from qsharness.result import BasisState, ExecutionResult


logger = logging.getLogger(__name__)


@runtime_checkable
class OutputReceiver(Protocol):
    """
    Callbacks an engine invokes while evaluating a program.

    Methods
    -------
    state(states, qubit_count)
        Record the final quantum state.
    message(text)
        Record one emitted message.
    """

    def state(
        self,
        states: Iterable[tuple[int, complex]],
        qubit_count: int,
    ) -> None:
        """
        Record the final quantum state, replacing any earlier one.

        Parameters
        ----------
        states : iterable of (int, complex)
            Sparse ``(basis_index, amplitude)`` pairs.
        qubit_count : int
            Number of qubits the indices are drawn from.
        """
        ...

    def message(self, text: str) -> None:
        """Record one message emitted by the program."""
        ...


def _as_qubit_count(qubit_count: int) -> int:
    """Coerce an integer-like qubit count; negative or non-integer is an error."""
    try:
        count = operator.index(qubit_count)
    except TypeError as exc:
        raise ObserverError(f"Invalid qubit count: {qubit_count!r}") from exc
    if count < 0:
        raise ObserverError(f"Invalid qubit count: {count}")
    return count


def format_state_id(index: int, qubit_count: int) -> str:
    """
    Render a basis index as a display identifier.

    Parameters
    ----------
    index : int
        Basis index (non-negative).
    qubit_count : int
        Qubit count the index belongs to; sets the zero-padded width.

    Returns
    -------
    str
        Ket-wrapped bit string, e.g. ``format_state_id(2, 3) == "|010⟩"``.
        An index wider than ``qubit_count`` bits is written in full.

    Raises
    ------
    ObserverError
        If the qubit count is negative or not an integer, or the index is
        negative or not an integer.
    """
    qubit_count = _as_qubit_count(qubit_count)
    try:
        index = operator.index(index)
    except TypeError as exc:
        raise ObserverError(f"Basis index must be an integer: {index!r}") from exc
    if index < 0:
        raise ObserverError(f"Basis index {index} is negative")
    return f"|{index:0{qubit_count}b}⟩" if qubit_count else f"|{index:b}⟩"


class ExecutionRecorder:
    """
    The harness's :class:`OutputReceiver`.

    Collects the state and messages of one run and freezes them into an
    :class:`~qsharness.result.ExecutionResult` via :meth:`to_result`.
    """

    def __init__(self) -> None:
        self._states: list[BasisState] = []
        self._qubit_count = 0
        self._messages: list[str] = []

    def state(
        self,
        states: Iterable[tuple[int, complex]],
        qubit_count: int,
    ) -> None:
        qubit_count = _as_qubit_count(qubit_count)
        recorded = [
            BasisState(
                id=format_state_id(index, qubit_count),
                amplitude_real=float(amplitude.real),
                amplitude_imaginary=float(amplitude.imag),
            )
            for index, amplitude in states
        ]
        # Previous state stays intact if any id fails to format.
        self._states = recorded
        self._qubit_count = qubit_count
        logger.debug(
            "Recorded state: %d basis state(s), %d qubit(s)",
            len(recorded),
            qubit_count,
        )

    def message(self, text: str) -> None:
        self._messages.append(text)

    def to_result(self) -> ExecutionResult:
        """Freeze what has been recorded so far."""
        return ExecutionResult(
            states=tuple(self._states),
            qubit_count=self._qubit_count,
            messages=tuple(self._messages),
        )
