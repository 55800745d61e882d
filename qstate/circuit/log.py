"""Ordered, append-only record of operations applied to one state lineage.

Renderers and exporters read the log; only the engine appends to it. Entries
hold qubit labels in the engine's own convention (1-based, qubit 1 least
significant). Translating to another convention is the consumer's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union, overload

import torch

from qstate.gates.core import Gate, GateKind


@dataclass(frozen=True, eq=False)
class GateEntry:
    """
    A recorded gate application.

    Attributes
    ----------
    kind:
        Tag from :class:`GateKind`, never ``MEASUREMENT``.
    name:
        Display name such as ``"H"`` or ``"CNOT"``.
    targets:
        Ordered target qubits.
    controls:
        Ordered control qubits; empty for uncontrolled gates.
    params:
        Numeric parameters, e.g. a rotation angle.
    matrix:
        Private copy of the gate matrix.
    """

    kind: GateKind
    name: str
    targets: Tuple[int, ...]
    controls: Tuple[int, ...] = ()
    params: Tuple[float, ...] = ()
    matrix: torch.Tensor | None = None

    @classmethod
    def from_gate(cls, gate: Gate) -> "GateEntry":
        return cls(
            kind=gate.kind,
            name=gate.name,
            targets=tuple(gate.targets),
            controls=tuple(gate.controls),
            params=tuple(gate.params),
            matrix=gate.matrix.clone(),
        )

    @property
    def qubits(self) -> Tuple[int, ...]:
        return self.controls + self.targets


@dataclass(frozen=True)
class MeasurementEntry:
    """A recorded projective measurement and its collapsed outcome."""

    target: int
    outcome: int
    kind: GateKind = field(default=GateKind.MEASUREMENT, init=False)

    @property
    def name(self) -> str:
        return "M"

    @property
    def targets(self) -> Tuple[int, ...]:
        return (self.target,)

    @property
    def controls(self) -> Tuple[int, ...]:
        return ()

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.target,)


CircuitLogEntry = Union[GateEntry, MeasurementEntry]


class CircuitLog:
    """
    Append-only ordered history of gate applications and measurements.

    Iteration always starts from the first entry, so consumers can walk the
    log any number of times.
    """

    def __init__(self) -> None:
        self._entries: List[CircuitLogEntry] = []

    def append_gate(self, gate: Gate) -> GateEntry:
        entry = GateEntry.from_gate(gate)
        self._entries.append(entry)
        return entry

    def append_measurement(self, qubit: int, outcome: int) -> MeasurementEntry:
        if outcome not in (0, 1):
            raise ValueError(f"Measurement outcome must be 0 or 1, got {outcome!r}.")
        entry = MeasurementEntry(target=int(qubit), outcome=int(outcome))
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> Tuple[CircuitLogEntry, ...]:
        """Return a read-only tuple of all entries."""
        return tuple(self._entries)

    def __iter__(self) -> Iterator[CircuitLogEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @overload
    def __getitem__(self, index: int) -> CircuitLogEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[CircuitLogEntry, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._entries[index])
        return self._entries[index]

    @property
    def has_measurements(self) -> bool:
        return any(e.kind is GateKind.MEASUREMENT for e in self._entries)

    def measurements(self) -> Tuple[MeasurementEntry, ...]:
        return tuple(e for e in self._entries if isinstance(e, MeasurementEntry))

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping entry names to their counts."""
        counts: Dict[str, int] = {}
        for entry in self._entries:
            counts[entry.name] = counts.get(entry.name, 0) + 1
        return counts

    def max_qubit(self) -> int:
        """Return the largest qubit label referenced, or 0 for an empty log."""
        return max((max(e.qubits) for e in self._entries), default=0)

    def depth(self) -> int:
        """
        Number of sequential layers if entries on disjoint qubits run in
        parallel. Controlled gates occupy the whole span between their
        lowest and highest qubit.
        """
        layer_of: Dict[int, int] = {}
        depth = 0
        for entry in self._entries:
            span = range(min(entry.qubits), max(entry.qubits) + 1)
            layer = max((layer_of.get(q, 0) for q in span), default=0) + 1
            for q in span:
                layer_of[q] = layer
            depth = max(depth, layer)
        return depth

    def copy(self) -> "CircuitLog":
        new = CircuitLog()
        new._entries.extend(self._entries)
        return new

    def __repr__(self) -> str:
        return f"CircuitLog({len(self._entries)} entries)"


__all__ = ["GateEntry", "MeasurementEntry", "CircuitLogEntry", "CircuitLog"]
