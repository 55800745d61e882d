"""Tests for gate construction and the standard gate library."""

from __future__ import annotations

import math

import numpy as np
import pytest
import torch

from qstate.config import config_context
from qstate.errors import InvalidMatrixError, OverlapError, QubitIndexError
from qstate.gates import (
    HADAMARD_MATRIX,
    NOT_MATRIX,
    PAULI_Y_MATRIX,
    PAULI_Z_MATRIX,
    S_MATRIX,
    SWAP_MATRIX,
    T_MATRIX,
    ControlledGate,
    GateKind,
    SingleQubitGate,
    UnitaryGate,
    cnot,
    controlled,
    cz,
    gate_qubits,
    hadamard,
    is_unitary,
    not_gate,
    pauli_z,
    rx,
    ry,
    rz,
    swap,
    toffoli,
    unitary,
)


@pytest.mark.parametrize(
    "matrix",
    [NOT_MATRIX, HADAMARD_MATRIX, PAULI_Y_MATRIX, PAULI_Z_MATRIX, S_MATRIX, T_MATRIX, SWAP_MATRIX],
)
def test_standard_matrices_are_unitary(matrix: torch.Tensor) -> None:
    """Every canonical matrix passes the unitarity check."""
    assert is_unitary(matrix)


def test_is_unitary_rejects() -> None:
    assert not is_unitary(torch.tensor([[1.0, 1.0], [0.0, 1.0]], dtype=torch.complex128))
    assert not is_unitary(torch.eye(3, 2, dtype=torch.complex128))


def test_rotations_are_unitary_with_params() -> None:
    for make in (rx, ry, rz):
        gate = make(1, 0.3)
        assert is_unitary(gate.matrix)
        assert gate.params == (0.3,)
        assert gate.kind is GateKind.GENERIC_UNITARY


def test_kind_tags() -> None:
    assert not_gate(1).kind is GateKind.NOT
    assert hadamard(1).kind is GateKind.HADAMARD
    assert pauli_z(1).kind is GateKind.PAULI_Z
    assert cnot(2, 1).kind is GateKind.CONTROLLED_NOT
    assert toffoli(1, 2, 3).kind is GateKind.CONTROLLED_NOT
    assert cz(1, 2).kind is GateKind.GENERIC_UNITARY


def test_kind_values_form_closed_set() -> None:
    assert {k.value for k in GateKind} == {
        "not",
        "hadamard",
        "controlled-not",
        "pauli-z",
        "generic-unitary",
        "measurement",
    }


def test_measurement_is_not_a_gate_kind() -> None:
    with pytest.raises(ValueError, match="measurement"):
        SingleQubitGate(NOT_MATRIX, 1, kind=GateKind.MEASUREMENT)


def test_kind_accepts_string_value() -> None:
    gate = SingleQubitGate(NOT_MATRIX, 1, name="X", kind="not")
    assert gate.kind is GateKind.NOT


class TestKindMatchesMatrix:
    def test_single_qubit_tag_must_match_matrix(self) -> None:
        with pytest.raises(InvalidMatrixError, match="does not match kind 'not'"):
            SingleQubitGate(HADAMARD_MATRIX, 1, kind=GateKind.NOT)
        with pytest.raises(InvalidMatrixError, match="hadamard"):
            SingleQubitGate(PAULI_Z_MATRIX, 1, kind="hadamard")

    def test_controlled_tag_must_match_matrix(self) -> None:
        with pytest.raises(InvalidMatrixError, match="controlled-not"):
            ControlledGate(HADAMARD_MATRIX, (2,), 1, kind=GateKind.CONTROLLED_NOT)

    def test_tag_must_match_shape(self) -> None:
        with pytest.raises(InvalidMatrixError, match="SingleQubitGate"):
            ControlledGate(PAULI_Z_MATRIX, (2,), 1, kind=GateKind.PAULI_Z)
        with pytest.raises(InvalidMatrixError, match="ControlledGate"):
            SingleQubitGate(NOT_MATRIX, 1, kind=GateKind.CONTROLLED_NOT)

    def test_tag_tolerates_rounding(self) -> None:
        nearly = HADAMARD_MATRIX.to(torch.complex64)
        with config_context(atol=1e-6):
            gate = SingleQubitGate(nearly, 1, kind=GateKind.HADAMARD)
        assert gate.kind is GateKind.HADAMARD


class TestMatrixValidation:
    def test_non_square(self) -> None:
        with pytest.raises(InvalidMatrixError, match="square"):
            SingleQubitGate(torch.zeros(2, 3, dtype=torch.complex128), 1)

    def test_dimension_must_match_targets(self) -> None:
        with pytest.raises(InvalidMatrixError, match="4x4"):
            unitary(NOT_MATRIX, (1, 2))
        with pytest.raises(InvalidMatrixError):
            SingleQubitGate(SWAP_MATRIX, 1)

    def test_non_unitary(self) -> None:
        with pytest.raises(InvalidMatrixError, match="unitary"):
            SingleQubitGate([[1, 1], [0, 1]], 1)

    def test_non_finite(self) -> None:
        with pytest.raises(InvalidMatrixError, match="non-finite"):
            SingleQubitGate([[float("nan"), 0], [0, 1]], 1)

    def test_non_numeric(self) -> None:
        with pytest.raises(InvalidMatrixError, match="numeric"):
            SingleQubitGate([["a", "b"], ["c", "d"]], 1)

    def test_list_and_numpy_inputs_keep_precision(self) -> None:
        """Nested lists and numpy arrays are checked in double precision."""
        s = 1 / math.sqrt(2)
        from_list = SingleQubitGate([[s, s], [s, -s]], 1)
        from_numpy = SingleQubitGate(np.array([[s, s], [s, -s]]), 1)
        assert torch.allclose(from_list.matrix, HADAMARD_MATRIX, atol=1e-15)
        assert torch.allclose(from_numpy.matrix, HADAMARD_MATRIX, atol=1e-15)

    def test_tolerance_follows_config(self) -> None:
        nearly = torch.tensor([[1.0, 1e-6], [0.0, 1.0]], dtype=torch.complex128)
        with pytest.raises(InvalidMatrixError):
            SingleQubitGate(nearly, 1)
        with config_context(atol=1e-3):
            SingleQubitGate(nearly, 1)

    def test_matrix_is_private_copy(self) -> None:
        source = HADAMARD_MATRIX.clone()
        gate = SingleQubitGate(source, 1)
        source[0, 0] = 0
        assert gate.matrix[0, 0] == HADAMARD_MATRIX[0, 0]

    def test_matrix_keeps_double_precision(self) -> None:
        with config_context(dtype=torch.complex64):
            h = hadamard(1)
            assert h.matrix.dtype == torch.complex128
            gate = controlled(h.matrix, 2, 1)
        assert torch.equal(gate.matrix, HADAMARD_MATRIX)


class TestQubitValidation:
    def test_labels_start_at_one(self) -> None:
        with pytest.raises(QubitIndexError):
            hadamard(0)
        with pytest.raises(QubitIndexError):
            cnot(0, 1)

    def test_target_control_overlap(self) -> None:
        with pytest.raises(OverlapError, match="both target and control"):
            cnot(1, 1)

    def test_duplicate_targets(self) -> None:
        with pytest.raises(OverlapError, match="repeated target"):
            swap(2, 2)

    def test_duplicate_controls(self) -> None:
        with pytest.raises(OverlapError, match="repeated control"):
            toffoli(1, 1, 2)

    def test_controlled_needs_a_control(self) -> None:
        with pytest.raises(QubitIndexError, match="control"):
            ControlledGate(NOT_MATRIX, (), 1)

    def test_unitary_needs_a_target(self) -> None:
        with pytest.raises(QubitIndexError, match="target"):
            UnitaryGate(torch.eye(1, dtype=torch.complex128), ())


class TestShapes:
    def test_single_qubit_gate_qubits(self) -> None:
        gate = hadamard(3)
        assert gate.targets == (3,)
        assert gate.controls == ()
        assert gate_qubits(gate) == (3,)

    def test_controlled_gate_qubits(self) -> None:
        gate = toffoli(1, 2, 3)
        assert gate.controls == (1, 2)
        assert gate.targets == (3,)
        assert gate_qubits(gate) == (1, 2, 3)

    def test_unitary_gate_qubits(self) -> None:
        gate = swap(1, 3)
        assert gate.targets == (1, 3)
        assert gate.controls == ()
        assert gate.name == "SWAP"

    def test_int_target_for_unitary(self) -> None:
        gate = unitary(HADAMARD_MATRIX, 2, name="H2")
        assert gate.targets == (2,)
        assert gate.name == "H2"

    def test_gates_are_immutable(self) -> None:
        gate = hadamard(1)
        with pytest.raises(AttributeError):
            gate.target = 2  # type: ignore[misc]


class TestControlled:
    def test_not_matrix_becomes_controlled_not(self) -> None:
        gate = controlled(NOT_MATRIX, 2, 1)
        assert gate.kind is GateKind.CONTROLLED_NOT
        assert gate.name == "CNOT"

    def test_other_matrix_stays_generic(self) -> None:
        gate = controlled(HADAMARD_MATRIX, (2, 3), 1, name="CCH")
        assert gate.kind is GateKind.GENERIC_UNITARY
        assert gate.name == "CCH"
        assert gate.controls == (2, 3)
