# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""Tests for result value types."""

from __future__ import annotations

import dataclasses
import json
import math

import numpy as np
import pytest
from qsharness.result import RESULT_SCHEMA_VERSION, BasisState, ExecutionResult


def _bell() -> ExecutionResult:
    amp = 1 / math.sqrt(2)
    return ExecutionResult(
        states=(
            BasisState("|00⟩", amp, 0.0),
            BasisState("|11⟩", amp, 0.0),
        ),
        qubit_count=2,
        messages=("prepared",),
    )


class TestBasisState:

    def test_amplitude_and_probability(self):
        state = BasisState("|1⟩", 0.6, -0.8)
        assert state.amplitude == complex(0.6, -0.8)
        assert state.probability == pytest.approx(1.0)

    def test_index_parsed_from_id(self):
        assert BasisState("|101⟩", 1.0, 0.0).index == 5
        assert BasisState("|101⟩", 1.0, 0.0).bits == "101"

    def test_immutable(self):
        state = BasisState("|0⟩", 1.0, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.amplitude_real = 0.5  # type: ignore[misc]


class TestExecutionResult:

    def test_defaults_are_empty(self):
        result = ExecutionResult()
        assert result.states == ()
        assert result.qubit_count == 0
        assert result.messages == ()

    def test_negative_qubit_count_rejected(self):
        with pytest.raises(ValueError, match="qubit_count"):
            ExecutionResult(qubit_count=-1)

    def test_read_only(self):
        result = _bell()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.messages = ()  # type: ignore[misc]

    def test_state_vector_is_dense(self):
        vec = _bell().state_vector()
        assert vec.dtype == np.complex128
        assert vec.shape == (4,)
        assert vec[1] == 0
        assert vec[2] == 0
        assert vec[0] == pytest.approx(1 / math.sqrt(2))
        assert vec[3] == pytest.approx(1 / math.sqrt(2))

    def test_probabilities(self):
        probs = _bell().probabilities()
        assert set(probs) == {"|00⟩", "|11⟩"}
        assert sum(probs.values()) == pytest.approx(1.0)


class TestSerialization:

    def test_to_dict_layout(self):
        d = _bell().to_dict()
        assert d["schema"] == RESULT_SCHEMA_VERSION
        assert d["qubit_count"] == 2
        assert d["messages"] == ["prepared"]
        assert d["states"][0] == {
            "id": "|00⟩",
            "amplitude_real": 1 / math.sqrt(2),
            "amplitude_imaginary": 0.0,
        }

    def test_json_round_trip_preserves_floats_exactly(self):
        """Amplitudes survive serialization bit-for-bit."""
        original = ExecutionResult(
            states=(
                BasisState("|01⟩", 0.1 + 0.2, -1e-300),
                BasisState("|10⟩", -0.30000000000000004, 2.2250738585072014e-308),
            ),
            qubit_count=2,
        )
        restored = ExecutionResult.from_json(original.to_json())

        assert restored == original
        for before, after in zip(original.states, restored.states):
            assert after.amplitude_real.hex() == before.amplitude_real.hex()
            assert after.amplitude_imaginary.hex() == before.amplitude_imaginary.hex()

    def test_json_keeps_ket_characters(self):
        text = _bell().to_json()
        assert "|00⟩" in text
        assert json.loads(text)["states"][1]["id"] == "|11⟩"

    def test_from_dict_skips_malformed_states(self):
        result = ExecutionResult.from_dict(
            {
                "states": ["junk", {"id": "|1⟩", "amplitude_real": 1.0}],
                "qubit_count": 1,
            }
        )
        assert result.states == (BasisState("|1⟩", 1.0, 0.0),)
