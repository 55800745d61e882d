"""Standard gate library.

Canonical matrices are module constants (NOT, Hadamard and Z live in
:mod:`.core`, which checks tagged gates against them) and every
constructor below builds an immutable gate from them. Qubit labels are
1-based throughout.
"""

from __future__ import annotations

import cmath
import math
from typing import Optional, Sequence

import torch

from .core import (
    ControlledGate,
    GateKind,
    HADAMARD_MATRIX,
    NOT_MATRIX,
    PAULI_Z_MATRIX,
    MatrixLike,
    SingleQubitGate,
    UnitaryGate,
    is_unitary,
    matches,
)

IDENTITY_MATRIX = torch.eye(2, dtype=torch.complex128)
PAULI_Y_MATRIX = torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=torch.complex128)
S_MATRIX = torch.tensor([[1.0, 0.0], [0.0, 1.0j]], dtype=torch.complex128)
T_MATRIX = torch.tensor(
    [[1.0, 0.0], [0.0, cmath.exp(1.0j * math.pi / 4.0)]], dtype=torch.complex128
)
# Local index bit 0 is the first listed target, bit 1 the second.
SWAP_MATRIX = torch.tensor(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ],
    dtype=torch.complex128,
)


def not_gate(target: int) -> SingleQubitGate:
    """Pauli-X (bit flip, NOT) on ``target``."""
    return SingleQubitGate(NOT_MATRIX, target, name="X", kind=GateKind.NOT)


def hadamard(target: int) -> SingleQubitGate:
    """Hadamard on ``target``: maps |0> to |+> and |1> to |->."""
    return SingleQubitGate(HADAMARD_MATRIX, target, name="H", kind=GateKind.HADAMARD)


def pauli_y(target: int) -> SingleQubitGate:
    return SingleQubitGate(PAULI_Y_MATRIX, target, name="Y")


def pauli_z(target: int) -> SingleQubitGate:
    """Pauli-Z (phase flip) on ``target``."""
    return SingleQubitGate(PAULI_Z_MATRIX, target, name="Z", kind=GateKind.PAULI_Z)


def phase_s(target: int) -> SingleQubitGate:
    """S gate, the square root of Z."""
    return SingleQubitGate(S_MATRIX, target, name="S")


def phase_t(target: int) -> SingleQubitGate:
    """T gate, the square root of S."""
    return SingleQubitGate(T_MATRIX, target, name="T")


def rx(target: int, theta: float) -> SingleQubitGate:
    """
    Rotation about the X axis: RX(θ) = exp(-iθX/2).

    Matrix form:
        [[cos(θ/2), -i sin(θ/2)],
         [-i sin(θ/2), cos(θ/2)]]
    """
    c, s = math.cos(theta / 2.0), math.sin(theta / 2.0)
    matrix = torch.tensor([[c, -1.0j * s], [-1.0j * s, c]], dtype=torch.complex128)
    return SingleQubitGate(matrix, target, name="RX", params=(theta,))


def ry(target: int, theta: float) -> SingleQubitGate:
    """
    Rotation about the Y axis: RY(θ) = exp(-iθY/2).

    Matrix form:
        [[cos(θ/2), -sin(θ/2)],
         [sin(θ/2), cos(θ/2)]]
    """
    c, s = math.cos(theta / 2.0), math.sin(theta / 2.0)
    matrix = torch.tensor([[c, -s], [s, c]], dtype=torch.complex128)
    return SingleQubitGate(matrix, target, name="RY", params=(theta,))


def rz(target: int, theta: float) -> SingleQubitGate:
    """
    Rotation about the Z axis: RZ(θ) = exp(-iθZ/2).

    Matrix form:
        [[exp(-iθ/2), 0],
         [0, exp(iθ/2)]]
    """
    matrix = torch.tensor(
        [[cmath.exp(-0.5j * theta), 0.0], [0.0, cmath.exp(0.5j * theta)]],
        dtype=torch.complex128,
    )
    return SingleQubitGate(matrix, target, name="RZ", params=(theta,))


def cnot(control: int, target: int) -> ControlledGate:
    """
    Controlled-NOT: flips ``target`` iff ``control`` is 1.

    With control 2 and target 1 the basis states map as
    |0,0> -> |0,0>, |1,0> -> |1,1>, |0,1> -> |0,1>, |1,1> -> |1,0>
    (kets list qubit 2 first).
    """
    return ControlledGate(NOT_MATRIX, (control,), target, name="CNOT", kind=GateKind.CONTROLLED_NOT)


def toffoli(control1: int, control2: int, target: int) -> ControlledGate:
    """Doubly-controlled NOT."""
    return ControlledGate(
        NOT_MATRIX, (control1, control2), target, name="CCNOT", kind=GateKind.CONTROLLED_NOT
    )


def cz(control: int, target: int) -> ControlledGate:
    """Controlled-Z; symmetric in its two qubits."""
    return ControlledGate(PAULI_Z_MATRIX, (control,), target, name="CZ")


def swap(qubit1: int, qubit2: int) -> UnitaryGate:
    """Exchange the states of two qubits."""
    return UnitaryGate(SWAP_MATRIX, (qubit1, qubit2), name="SWAP")


def controlled(
    matrix: MatrixLike,
    controls: Sequence[int] | int,
    target: int,
    name: Optional[str] = None,
) -> ControlledGate:
    """
    Control an arbitrary 2x2 unitary on one or more qubits.

    A NOT matrix is tagged ``controlled-not``; anything else is a generic
    unitary.
    """
    gate = ControlledGate(matrix, controls, target, name=name or "CU")
    if matches(gate.matrix, NOT_MATRIX):
        return ControlledGate(
            gate.matrix, gate.controls, target, name=name or "CNOT", kind=GateKind.CONTROLLED_NOT
        )
    return gate


def unitary(
    matrix: MatrixLike,
    targets: Sequence[int] | int,
    name: Optional[str] = None,
) -> UnitaryGate:
    """
    Wrap a ``2**k x 2**k`` unitary acting on ``k`` ordered targets.

    ``targets[0]`` is the least-significant bit of the matrix index.
    """
    return UnitaryGate(matrix, targets, name=name or "U")


# Short aliases used in walkthrough code.
X = not_gate
H = hadamard
Y = pauli_y
Z = pauli_z
S = phase_s
T = phase_t
CNOT = cnot
CCNOT = toffoli
SWAP = swap

__all__ = [
    "IDENTITY_MATRIX",
    "NOT_MATRIX",
    "HADAMARD_MATRIX",
    "PAULI_Y_MATRIX",
    "PAULI_Z_MATRIX",
    "S_MATRIX",
    "T_MATRIX",
    "SWAP_MATRIX",
    "not_gate",
    "hadamard",
    "pauli_y",
    "pauli_z",
    "phase_s",
    "phase_t",
    "rx",
    "ry",
    "rz",
    "cnot",
    "toffoli",
    "cz",
    "swap",
    "controlled",
    "unitary",
    "is_unitary",
    "X",
    "H",
    "Y",
    "Z",
    "S",
    "T",
    "CNOT",
    "CCNOT",
    "SWAP",
]
