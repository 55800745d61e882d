"""OpenQASM 2.0 exporter for circuit logs.

The exporter reads a :class:`~qstate.circuit.CircuitLog` and emits one
``<gate> <qubit-refs>;`` statement per gate entry, translating the engine's
1-based labels to QASM's 0-based ``q[i]`` references (qubit 1 becomes
``q[0]``, which is also the least significant bit in QASM's convention).

Measurements are only exported when explicitly requested with
``measure=True``, because they need a classical register. The register
``creg c[n];`` is declared just before the first measurement statement and
each ``measure q[i] -> c[i];`` keeps its position in the log. Without the
flag every gate entry is still exported and measurement entries are skipped.

Supported gates:
    - NOT, Hadamard, Pauli-Z, controlled-NOT (one or two controls)
    - Y, S, T, RX, RY, RZ, CZ, SWAP

Generic unitaries without a QASM spelling raise :class:`ExportError`, as
does a gate whose name or tag promises a QASM gate its matrix does not
implement.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import torch

from qstate.circuit.log import CircuitLog, CircuitLogEntry, GateEntry
from qstate.errors import ExportError
from qstate.gates.core import HADAMARD_MATRIX, NOT_MATRIX, PAULI_Z_MATRIX, GateKind, matches
from qstate.gates.standard import PAULI_Y_MATRIX, S_MATRIX, SWAP_MATRIX, T_MATRIX, rx, ry, rz
from qstate.logging import get_logger

from .utils import float_to_angle_str, qasm_qubit

logger = get_logger(__name__)

_TAGGED = {
    GateKind.NOT: ("x", NOT_MATRIX),
    GateKind.HADAMARD: ("h", HADAMARD_MATRIX),
    GateKind.PAULI_Z: ("z", PAULI_Z_MATRIX),
}
_PLAIN_SINGLE = {"Y": ("y", PAULI_Y_MATRIX), "S": ("s", S_MATRIX), "T": ("t", T_MATRIX)}
_ROTATIONS = {"RX": ("rx", rx), "RY": ("ry", ry), "RZ": ("rz", rz)}


def export_qasm(
    log: CircuitLog,
    nbits: int,
    measure: bool = False,
    include_qelib: bool = True,
) -> str:
    """
    Export a circuit log to OpenQASM 2.0.

    Parameters
    ----------
    log : CircuitLog
        Operations to export, in order.
    nbits : int
        Size of the quantum register to declare.
    measure : bool
        Whether to emit measurement statements and the classical register.
    include_qelib : bool
        Whether to include the qelib1.inc header.

    Returns
    -------
    str
        OpenQASM 2.0 source code.

    Raises
    ------
    ExportError
        If an entry has no QASM 2.0 representation or references a qubit
        beyond ``nbits``.
    """
    if nbits < 1:
        raise ExportError(f"nbits must be >= 1, got {nbits}")
    if log.max_qubit() > nbits:
        raise ExportError(
            f"log references qubit {log.max_qubit()} but only {nbits} qubits are declared"
        )

    lines = ["OPENQASM 2.0;"]
    if include_qelib:
        lines.append('include "qelib1.inc";')
    lines.append(f"qreg q[{nbits}];")
    lines.append("")

    creg_declared = False
    for entry in log:
        if entry.kind is GateKind.MEASUREMENT:
            if not measure:
                continue
            if not creg_declared:
                lines.append(f"creg c[{nbits}];")
                creg_declared = True
            lines.append(
                f"measure {qasm_qubit(entry.target)} -> {qasm_qubit(entry.target, 'c')};"
            )
        else:
            lines.append(_gate_to_qasm(entry))

    if measure and not creg_declared:
        logger.debug("export_qasm: measure=True but the log holds no measurements")
    return "\n".join(lines) + "\n"


def write_qasm(
    log: CircuitLog,
    nbits: int,
    path: Union[str, Path],
    measure: bool = False,
) -> Path:
    """Export ``log`` with :func:`export_qasm` and write it to ``path``."""
    text = export_qasm(log, nbits, measure=measure)
    path = Path(path)
    path.write_text(text, encoding="utf-8")
    logger.info("wrote %d QASM lines to %s", text.count("\n"), path)
    return path


def _refs(qubits) -> str:
    return ",".join(qasm_qubit(q) for q in qubits)


def _check_matrix(entry: GateEntry, expected: torch.Tensor, spelling: str) -> None:
    """Refuse to spell ``entry`` as ``spelling`` unless its matrix agrees."""
    if entry.matrix is None or not matches(entry.matrix, expected):
        raise ExportError(
            f"Gate '{entry.name}' is exported as '{spelling}' but its matrix differs "
            "from the standard one."
        )


def _gate_to_qasm(entry: CircuitLogEntry) -> str:
    """Convert one gate entry to a QASM statement."""
    if not isinstance(entry, GateEntry):
        raise TypeError(f"Expected GateEntry, got {type(entry).__name__}")

    kind = entry.kind
    name = entry.name.upper()

    if kind in _TAGGED:
        spelling, expected = _TAGGED[kind]
        _check_matrix(entry, expected, spelling)
        return f"{spelling} {_refs(entry.targets)};"
    if kind is GateKind.CONTROLLED_NOT:
        _check_matrix(entry, NOT_MATRIX, "cx")
        if len(entry.controls) == 1:
            return f"cx {_refs(entry.controls + entry.targets)};"
        if len(entry.controls) == 2:
            return f"ccx {_refs(entry.controls + entry.targets)};"
        raise ExportError(
            f"Cannot export controlled-NOT with {len(entry.controls)} controls to QASM 2.0."
        )

    if not entry.controls and len(entry.targets) == 1:
        if name in _PLAIN_SINGLE:
            spelling, expected = _PLAIN_SINGLE[name]
            _check_matrix(entry, expected, spelling)
            return f"{spelling} {_refs(entry.targets)};"
        if name in _ROTATIONS and len(entry.params) == 1:
            spelling, build = _ROTATIONS[name]
            theta = entry.params[0]
            _check_matrix(entry, build(1, theta).matrix, spelling)
            return f"{spelling}({float_to_angle_str(theta)}) {_refs(entry.targets)};"
    if name == "CZ" and len(entry.controls) == 1:
        _check_matrix(entry, PAULI_Z_MATRIX, "cz")
        return f"cz {_refs(entry.controls + entry.targets)};"
    if name == "SWAP" and not entry.controls and len(entry.targets) == 2:
        _check_matrix(entry, SWAP_MATRIX, "swap")
        return f"swap {_refs(entry.targets)};"

    raise ExportError(
        f"Cannot export gate '{entry.name}' ({kind.value}) to QASM 2.0. "
        "Supported gates: X, H, Z, CNOT, CCNOT, Y, S, T, RX, RY, RZ, CZ, SWAP."
    )


__all__ = ["export_qasm", "write_qasm"]
