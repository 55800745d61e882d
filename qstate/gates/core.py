"""Gate descriptions: a closed tagged variant of unitary operations.

A gate is pure data. It records a unitary matrix and the 1-based qubits it
acts on; applying it to a state is the job of :func:`qstate.backend.apply`.
Three shapes exist:

- :class:`SingleQubitGate`: a 2x2 matrix on one target.
- :class:`ControlledGate`: a 2x2 matrix applied to one target iff every
  control qubit is 1.
- :class:`UnitaryGate`: a ``2**k x 2**k`` matrix on ``k`` ordered targets.
  ``targets[j]`` is bit ``j`` of the matrix's row/column index, so the first
  listed target is the least significant, matching the register convention.

Each gate also carries a :class:`GateKind` tag from a small closed set that
renderers and exporters switch on.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from qstate.config import get_config
from qstate.errors import InvalidMatrixError, OverlapError, QubitIndexError

MatrixLike = Union[torch.Tensor, np.ndarray, Sequence[Sequence[complex]]]

_SQRT2_INV = 1.0 / math.sqrt(2.0)

NOT_MATRIX = torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.complex128)
HADAMARD_MATRIX = torch.tensor(
    [[_SQRT2_INV, _SQRT2_INV], [_SQRT2_INV, -_SQRT2_INV]], dtype=torch.complex128
)
PAULI_Z_MATRIX = torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=torch.complex128)


class GateKind(str, enum.Enum):
    """Closed set of operation tags exposed to renderers and exporters."""

    NOT = "not"
    HADAMARD = "hadamard"
    CONTROLLED_NOT = "controlled-not"
    PAULI_Z = "pauli-z"
    GENERIC_UNITARY = "generic-unitary"
    MEASUREMENT = "measurement"


def is_unitary(matrix: torch.Tensor, atol: Optional[float] = None) -> bool:
    """
    Check if a square matrix is unitary within a given tolerance.

    A matrix U is unitary if U U† = I, where U† is the conjugate transpose.

    Args:
        matrix: Tensor of shape (n, n).
        atol: Absolute tolerance on every entry of ``U U† - I``. Defaults to
            the configured tolerance.

    Returns:
        True if the matrix is unitary (within tolerance), False otherwise.
    """
    if atol is None:
        atol = get_config().atol
    if matrix.dim() != 2 or matrix.shape[0] != matrix.shape[1]:
        return False

    m = matrix.to(torch.complex128)
    product = m @ m.conj().transpose(-1, -2)
    identity = torch.eye(m.shape[0], dtype=m.dtype, device=m.device)
    return bool(torch.all((product - identity).abs() <= atol))


def as_matrix(matrix: MatrixLike, n_targets: int, name: str) -> torch.Tensor:
    """
    Coerce ``matrix`` to a validated ``2**n_targets`` square unitary tensor.

    The check runs in double precision and the stored copy stays in double
    precision on the CPU, so a stored matrix always passes the same check
    again. It shares no memory with the input; the engine casts it to the
    state dtype at application time.

    Raises
    ------
    InvalidMatrixError
        If the matrix is not square, not ``2**n_targets`` wide, or not
        unitary within the configured tolerance.
    """
    try:
        if isinstance(matrix, torch.Tensor):
            m = matrix.detach().to(torch.complex128)
        else:
            m = torch.from_numpy(np.asarray(matrix, dtype=np.complex128))
    except (TypeError, ValueError, RuntimeError) as exc:
        raise InvalidMatrixError(f"Gate {name!r}: matrix is not numeric ({exc}).") from exc

    if m.dim() != 2 or m.shape[0] != m.shape[1]:
        raise InvalidMatrixError(
            f"Gate {name!r}: matrix must be square, got shape {tuple(m.shape)}."
        )
    expected = 1 << n_targets
    if m.shape[0] != expected:
        raise InvalidMatrixError(
            f"Gate {name!r}: {n_targets} target(s) require a {expected}x{expected} "
            f"matrix, got {m.shape[0]}x{m.shape[1]}."
        )
    if not bool(torch.all(torch.isfinite(m.abs()))):
        raise InvalidMatrixError(f"Gate {name!r}: matrix has non-finite entries.")
    if not is_unitary(m):
        raise InvalidMatrixError(
            f"Gate {name!r}: matrix is not unitary within tolerance {get_config().atol}."
        )
    return m.cpu().clone()


def _check_qubits(name: str, targets: Tuple[int, ...], controls: Tuple[int, ...]) -> None:
    if not targets:
        raise QubitIndexError(f"Gate {name!r} must act on at least one target qubit.")
    for q in targets + controls:
        if q < 1:
            raise QubitIndexError(f"Gate {name!r}: qubit labels start at 1, got {q}.")
    if len(set(targets)) != len(targets):
        raise OverlapError(f"Gate {name!r}: repeated target qubit in {targets}.")
    if len(set(controls)) != len(controls):
        raise OverlapError(f"Gate {name!r}: repeated control qubit in {controls}.")
    shared = set(targets) & set(controls)
    if shared:
        raise OverlapError(
            f"Gate {name!r}: qubit(s) {sorted(shared)} used as both target and control."
        )


def _labels(qubits: Any) -> Tuple[int, ...]:
    if isinstance(qubits, (int, np.integer)):
        return (int(qubits),)
    return tuple(int(q) for q in qubits)


@dataclass(frozen=True, eq=False)
class SingleQubitGate:
    """A 2x2 unitary acting on one target qubit."""

    matrix: torch.Tensor
    target: int
    name: str = "U"
    kind: GateKind = GateKind.GENERIC_UNITARY
    params: Tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", int(self.target))
        object.__setattr__(self, "params", tuple(float(p) for p in self.params))
        _coerce_kind(self)
        _check_qubits(self.name, (self.target,), ())
        object.__setattr__(self, "matrix", as_matrix(self.matrix, 1, self.name))
        _check_kind(self)

    @property
    def targets(self) -> Tuple[int, ...]:
        return (self.target,)

    @property
    def controls(self) -> Tuple[int, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class ControlledGate:
    """A 2x2 unitary applied to ``target`` iff all ``controls`` are 1."""

    matrix: torch.Tensor
    controls: Tuple[int, ...]
    target: int
    name: str = "CU"
    kind: GateKind = GateKind.GENERIC_UNITARY
    params: Tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", int(self.target))
        object.__setattr__(self, "controls", _labels(self.controls))
        object.__setattr__(self, "params", tuple(float(p) for p in self.params))
        _coerce_kind(self)
        if not self.controls:
            raise QubitIndexError(f"Gate {self.name!r} needs at least one control qubit.")
        _check_qubits(self.name, (self.target,), self.controls)
        object.__setattr__(self, "matrix", as_matrix(self.matrix, 1, self.name))
        _check_kind(self)

    @property
    def targets(self) -> Tuple[int, ...]:
        return (self.target,)


@dataclass(frozen=True, eq=False)
class UnitaryGate:
    """A ``2**k x 2**k`` unitary acting on ``k`` ordered target qubits."""

    matrix: torch.Tensor
    targets: Tuple[int, ...]
    name: str = "U"
    kind: GateKind = GateKind.GENERIC_UNITARY
    params: Tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", _labels(self.targets))
        object.__setattr__(self, "params", tuple(float(p) for p in self.params))
        _coerce_kind(self)
        _check_qubits(self.name, self.targets, ())
        object.__setattr__(self, "matrix", as_matrix(self.matrix, len(self.targets), self.name))
        _check_kind(self)

    @property
    def controls(self) -> Tuple[int, ...]:
        return ()


Gate = Union[SingleQubitGate, ControlledGate, UnitaryGate]


def matches(matrix: torch.Tensor, expected: torch.Tensor, atol: Optional[float] = None) -> bool:
    """Return True if ``matrix`` equals ``expected`` entrywise within ``atol``."""
    if atol is None:
        atol = get_config().atol
    if tuple(matrix.shape) != tuple(expected.shape):
        return False
    m = matrix.detach().to(dtype=torch.complex128, device="cpu")
    return bool(torch.all((m - expected.to(torch.complex128)).abs() <= atol))


# Tags that promise a specific matrix and gate shape.
_TAGGED_MATRICES = {
    GateKind.NOT: NOT_MATRIX,
    GateKind.HADAMARD: HADAMARD_MATRIX,
    GateKind.PAULI_Z: PAULI_Z_MATRIX,
    GateKind.CONTROLLED_NOT: NOT_MATRIX,
}


def _coerce_kind(gate: Any) -> None:
    kind = GateKind(gate.kind)
    if kind is GateKind.MEASUREMENT:
        raise ValueError(f"Gate {gate.name!r}: 'measurement' is not a gate kind.")
    object.__setattr__(gate, "kind", kind)


def _check_kind(gate: Any) -> None:
    """Reject a tag that contradicts the gate's shape or validated matrix."""
    expected = _TAGGED_MATRICES.get(gate.kind)
    if expected is None:
        return
    shape = ControlledGate if gate.kind is GateKind.CONTROLLED_NOT else SingleQubitGate
    if not isinstance(gate, shape):
        raise InvalidMatrixError(
            f"Gate {gate.name!r}: kind {gate.kind.value!r} requires a {shape.__name__}, "
            f"got {type(gate).__name__}."
        )
    if not matches(gate.matrix, expected):
        raise InvalidMatrixError(
            f"Gate {gate.name!r}: matrix does not match kind {gate.kind.value!r}."
        )


def gate_qubits(gate: Gate) -> Tuple[int, ...]:
    """Return every qubit a gate touches, controls first."""
    return gate.controls + gate.targets


__all__ = [
    "GateKind",
    "Gate",
    "SingleQubitGate",
    "ControlledGate",
    "UnitaryGate",
    "MatrixLike",
    "is_unitary",
    "as_matrix",
    "gate_qubits",
    "matches",
    "NOT_MATRIX",
    "HADAMARD_MATRIX",
    "PAULI_Z_MATRIX",
]
