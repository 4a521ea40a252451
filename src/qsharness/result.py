# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""
Execution results.

This module defines the value types a run produces: one
:class:`BasisState` per nonzero basis amplitude of the final quantum
state, collected together with the program's messages into an
:class:`ExecutionResult`.

Basis State Ids
---------------
Ids render the basis index in binary, zero-padded to the qubit count and
wrapped in ket notation, e.g. index 1 of a 3-qubit state is ``|001⟩``.
Ids produced for the same qubit count are therefore directly comparable
across runs.

Amplitudes are stored exactly as the engine computed them. Serialization
through :meth:`ExecutionResult.to_dict` / :meth:`ExecutionResult.to_json`
keeps every float bit-for-bit.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


RESULT_SCHEMA_VERSION = "qsharness.execution_result/1.0"

_KET_OPEN = "|"
_KET_CLOSE = "⟩"


@dataclass(frozen=True)
class BasisState:
    """
    Amplitude of a single computational basis state.

    Parameters
    ----------
    id : str
        Display identifier of the basis state (e.g. ``"|01⟩"``).
    amplitude_real : float
        Real part of the amplitude.
    amplitude_imaginary : float
        Imaginary part of the amplitude.
    """

    id: str
    amplitude_real: float
    amplitude_imaginary: float

    @property
    def amplitude(self) -> complex:
        """Amplitude as a complex number."""
        return complex(self.amplitude_real, self.amplitude_imaginary)

    @property
    def probability(self) -> float:
        """Squared magnitude of the amplitude."""
        return self.amplitude_real**2 + self.amplitude_imaginary**2

    @property
    def bits(self) -> str:
        """Bit label without the ket delimiters."""
        return self.id.removeprefix(_KET_OPEN).removesuffix(_KET_CLOSE)

    @property
    def index(self) -> int:
        """Basis index the id was rendered from."""
        return int(self.bits, 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "amplitude_real": self.amplitude_real,
            "amplitude_imaginary": self.amplitude_imaginary,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> BasisState:
        """Create from dictionary."""
        return cls(
            id=str(d["id"]),
            amplitude_real=float(d.get("amplitude_real", 0.0)),
            amplitude_imaginary=float(d.get("amplitude_imaginary", 0.0)),
        )


@dataclass(frozen=True)
class ExecutionResult:
    """
    Observable output of one program run.

    Parameters
    ----------
    states : tuple of BasisState
        Final state as reported by the engine, in engine order. Empty when
        the program never reported a state (e.g. it allocates no qubits).
    qubit_count : int
        Number of qubits in the reported state.
    messages : tuple of str
        Messages in the exact order the program emitted them.

    Notes
    -----
    Instances are produced by :class:`~qsharness.observer.ExecutionRecorder`
    and are read-only once returned to the caller.
    """

    states: tuple[BasisState, ...] = ()
    qubit_count: int = 0
    messages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.qubit_count < 0:
            raise ValueError(f"qubit_count must be >= 0, got: {self.qubit_count}")

    def state_vector(self) -> NDArray[np.complex128]:
        """
        Dense state vector of length ``2**qubit_count``.

        Basis states absent from the sparse result are zero.

        Returns
        -------
        numpy.ndarray
            Complex amplitudes indexed by basis index.
        """
        vector = np.zeros(2**self.qubit_count, dtype=np.complex128)
        for state in self.states:
            vector[state.index] = state.amplitude
        return vector

    def probabilities(self) -> dict[str, float]:
        """Map each basis state id to its probability."""
        return {state.id: state.probability for state in self.states}

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "schema": RESULT_SCHEMA_VERSION,
            "qubit_count": self.qubit_count,
            "states": [state.to_dict() for state in self.states],
            "messages": list(self.messages),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ExecutionResult:
        """Create from dictionary."""
        return cls(
            states=tuple(
                BasisState.from_dict(x)
                for x in d.get("states", [])
                if isinstance(x, dict)
            ),
            qubit_count=int(d.get("qubit_count", 0)),
            messages=tuple(str(m) for m in d.get("messages", [])),
        )

    def to_json(self, **kwargs: Any) -> str:
        """Serialize to a JSON string. Keyword arguments go to ``json.dumps``."""
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str) -> ExecutionResult:
        """Create from a JSON string produced by :meth:`to_json`."""
        return cls.from_dict(json.loads(text))
