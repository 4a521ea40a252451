# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qsharness

"""Tests for the output observer."""

from __future__ import annotations

import numpy as np
import pytest
from qsharness.errors import ObserverError
from qsharness.observer import ExecutionRecorder, OutputReceiver, format_state_id


class TestFormatStateId:

    @pytest.mark.parametrize(
        "index,qubit_count,expected",
        [
            (0, 1, "|0⟩"),
            (1, 1, "|1⟩"),
            (0, 3, "|000⟩"),
            (2, 3, "|010⟩"),
            (7, 3, "|111⟩"),
            (0, 0, "|0⟩"),
        ],
    )
    def test_zero_padded_to_qubit_count(self, index, qubit_count, expected):
        assert format_state_id(index, qubit_count) == expected

    def test_large_index(self):
        assert format_state_id(2**70, 71) == "|1" + "0" * 70 + "⟩"

    def test_negative_qubit_count(self):
        with pytest.raises(ObserverError, match="qubit count"):
            format_state_id(0, -1)

    def test_index_wider_than_qubit_count_written_in_full(self):
        assert format_state_id(5, 2) == "|101⟩"
        assert format_state_id(1, 0) == "|1⟩"

    def test_integer_like_arguments(self):
        assert format_state_id(np.int64(2), np.int32(3)) == "|010⟩"

    def test_non_integer_qubit_count(self):
        with pytest.raises(ObserverError, match="qubit count"):
            format_state_id(0, 2.0)  # type: ignore[arg-type]

    def test_negative_index(self):
        with pytest.raises(ObserverError):
            format_state_id(-1, 2)

    def test_non_integer_index(self):
        with pytest.raises(ObserverError, match="integer"):
            format_state_id(1.5, 2)  # type: ignore[arg-type]


class TestExecutionRecorder:

    def test_implements_receiver_protocol(self):
        assert isinstance(ExecutionRecorder(), OutputReceiver)

    def test_fresh_recorder_is_empty(self):
        result = ExecutionRecorder().to_result()
        assert result.states == ()
        assert result.qubit_count == 0
        assert result.messages == ()

    def test_messages_kept_in_order_with_duplicates(self):
        rec = ExecutionRecorder()
        for text in ["A", "B", "A", ""]:
            rec.message(text)
        assert list(rec.to_result().messages) == ["A", "B", "A", ""]

    def test_state_amplitudes_stored_verbatim(self):
        rec = ExecutionRecorder()
        amp = complex(0.1 + 0.2, -1 / 3)
        rec.state([(1, amp)], 2)

        (state,) = rec.to_result().states
        assert state.id == "|01⟩"
        assert state.amplitude_real == amp.real
        assert state.amplitude_imaginary == amp.imag

    def test_state_overwrites_previous_state(self):
        rec = ExecutionRecorder()
        rec.state([(0, 1 + 0j), (1, 0j)], 1)
        rec.state([(3, -1j)], 2)

        result = rec.to_result()
        assert result.qubit_count == 2
        assert [s.id for s in result.states] == ["|11⟩"]
        assert result.states[0].amplitude_imaginary == -1.0

    def test_state_keeps_engine_order(self):
        rec = ExecutionRecorder()
        rec.state([(3, 0.5 + 0j), (0, 0.5 + 0j), (1, 0.5 + 0j)], 2)
        assert [s.id for s in rec.to_result().states] == ["|11⟩", "|00⟩", "|01⟩"]

    def test_empty_state_with_zero_qubits(self):
        rec = ExecutionRecorder()
        rec.state([], 0)
        result = rec.to_result()
        assert result.states == ()
        assert result.qubit_count == 0

    def test_failed_state_leaves_previous_state(self):
        rec = ExecutionRecorder()
        rec.state([(1, 1 + 0j)], 1)

        with pytest.raises(ObserverError):
            rec.state([(0, 1 + 0j), (-1, 0j)], 2)

        result = rec.to_result()
        assert result.qubit_count == 1
        assert [s.id for s in result.states] == ["|1⟩"]

    def test_invalid_qubit_count_rejected_without_states(self):
        with pytest.raises(ObserverError, match="qubit count"):
            ExecutionRecorder().state([], -2)

    def test_result_is_a_snapshot(self):
        """Later recording does not change an already returned result."""
        rec = ExecutionRecorder()
        rec.message("first")
        snapshot = rec.to_result()
        rec.message("second")
        assert list(snapshot.messages) == ["first"]

    def test_numpy_qubit_count_accepted(self):
        rec = ExecutionRecorder()
        rec.state([(np.int64(3), 1j)], np.int64(2))

        result = rec.to_result()
        assert result.qubit_count == 2
        assert type(result.qubit_count) is int
        assert [s.id for s in result.states] == ["|11⟩"]

    def test_wide_index_recorded(self):
        """Indices wider than the qubit count are recorded, not rejected."""
        rec = ExecutionRecorder()
        rec.state([(5, 1 + 0j)], 2)
        assert [s.id for s in rec.to_result().states] == ["|101⟩"]
