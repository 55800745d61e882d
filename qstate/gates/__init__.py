"""Gate descriptions and the standard gate library."""

from .core import (
    ControlledGate,
    Gate,
    GateKind,
    SingleQubitGate,
    UnitaryGate,
    gate_qubits,
    is_unitary,
)
from .standard import (
    CCNOT,
    CNOT,
    HADAMARD_MATRIX,
    IDENTITY_MATRIX,
    NOT_MATRIX,
    PAULI_Y_MATRIX,
    PAULI_Z_MATRIX,
    S_MATRIX,
    SWAP,
    SWAP_MATRIX,
    T_MATRIX,
    H,
    S,
    T,
    X,
    Y,
    Z,
    cnot,
    controlled,
    cz,
    hadamard,
    not_gate,
    pauli_y,
    pauli_z,
    phase_s,
    phase_t,
    rx,
    ry,
    rz,
    swap,
    toffoli,
    unitary,
)

__all__ = [
    "Gate",
    "GateKind",
    "SingleQubitGate",
    "ControlledGate",
    "UnitaryGate",
    "gate_qubits",
    "is_unitary",
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
