"""Gate application engine.

Applies a k-target gate to an n-qubit state in place without building the
dense ``2**n x 2**n`` operator:

1. The ``2**n`` basis indices are split into ``2**(n-k)`` groups that agree
   on every non-target bit. Within a group, member ``j`` has the target bits
   set to the binary digits of ``j`` (``targets[0]`` least significant).
2. For a controlled gate, groups whose control bits are not all 1 are left
   alone.
3. Every remaining group's ``2**k`` amplitudes are left-multiplied by the
   gate matrix and written back to the same positions.

Groups are disjoint, so the order in which they are processed does not
matter. They are handled here as one batched gather / matmul / scatter.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Optional, Tuple

import torch

from qstate.diagnostics import assert_normalized, is_debug_enabled
from qstate.errors import OverlapError, QubitIndexError
from qstate.gates.core import ControlledGate, Gate, SingleQubitGate, UnitaryGate
from qstate.logging import get_logger
from qstate.state.core import QuantumState

if TYPE_CHECKING:
    from qstate.circuit.log import CircuitLog

logger = get_logger(__name__)


def _validate(gate: Gate, nbits: int) -> None:
    for q in gate.controls + gate.targets:
        if q < 1 or q > nbits:
            raise QubitIndexError(
                f"apply {gate.name}: qubit {q} out of range [1, {nbits}]"
            )
    shared = set(gate.targets) & set(gate.controls)
    if shared:
        raise OverlapError(
            f"apply {gate.name}: qubit(s) {sorted(shared)} used as both target and control"
        )


def _spread(values: torch.Tensor, qubits: Tuple[int, ...]) -> torch.Tensor:
    """Place bit ``j`` of each value at the position of ``qubits[j]``."""
    out = torch.zeros_like(values)
    for j, q in enumerate(qubits):
        out |= ((values >> j) & 1) << (q - 1)
    return out


# Each cached entry holds 2**nbits int64 indices (8 MiB at 20 qubits), so only
# small registers are cached and the entry count is bounded.
_INDEX_CACHE_SIZE = 32
_INDEX_CACHE_MAX_QUBITS = 16


def _build_groups(
    nbits: int,
    targets: Tuple[int, ...],
    controls: Tuple[int, ...] = (),
) -> torch.Tensor:
    others = tuple(q for q in range(1, nbits + 1) if q not in targets)
    base = _spread(torch.arange(1 << len(others), dtype=torch.int64), others)
    if controls:
        mask = 0
        for q in controls:
            mask |= 1 << (q - 1)
        base = base[(base & mask) == mask]
    offsets = _spread(torch.arange(1 << len(targets), dtype=torch.int64), targets)
    return base.unsqueeze(1) | offsets.unsqueeze(0)


_cached_groups = lru_cache(maxsize=_INDEX_CACHE_SIZE)(_build_groups)


def group_indices(
    nbits: int,
    targets: Tuple[int, ...],
    controls: Tuple[int, ...] = (),
) -> torch.Tensor:
    """
    Return the basis-index groups a gate acts on.

    Parameters
    ----------
    nbits:
        Register size.
    targets:
        Ordered target qubits (1-based).
    controls:
        Control qubits. Groups with any control bit 0 are dropped.

    Returns
    -------
    torch.Tensor
        ``int64`` tensor of shape ``(n_groups, 2**len(targets))``. Row ``g``
        lists the indices of one group, ordered by local target index.
        Results for registers of up to 16 qubits come from a small LRU cache
        and must not be modified; larger registers are rebuilt on each call.
    """
    if nbits > _INDEX_CACHE_MAX_QUBITS:
        return _build_groups(nbits, targets, controls)
    return _cached_groups(nbits, targets, controls)


def clear_index_cache() -> None:
    """Drop cached index groups."""
    _cached_groups.cache_clear()


def index_cache_info():
    """Hit/miss statistics of the index-group cache (a ``functools`` cache info tuple)."""
    return _cached_groups.cache_info()


def _groups_for(gate: Gate, nbits: int) -> torch.Tensor:
    if isinstance(gate, SingleQubitGate):
        return group_indices(nbits, (gate.target,))
    if isinstance(gate, ControlledGate):
        return group_indices(nbits, (gate.target,), tuple(sorted(gate.controls)))
    if isinstance(gate, UnitaryGate):
        return group_indices(nbits, tuple(gate.targets))
    raise TypeError(f"Unsupported gate type {type(gate).__name__}")


def apply(gate: Gate, state: QuantumState, log: Optional["CircuitLog"] = None) -> None:
    """
    Apply ``gate`` to ``state`` in place.

    Args:
        gate: Any gate variant from :mod:`qstate.gates`.
        state: State to mutate. Its amplitude tensor object is kept.
        log: Optional circuit log; a gate entry is appended on success.

    Raises:
        QubitIndexError: If a target or control is outside ``[1, nbits]``.
        OverlapError: If a qubit is both target and control.
        TypeError: If ``gate`` is not a gate variant.

    On any error the state is left unmodified.
    """
    if not isinstance(gate, (SingleQubitGate, ControlledGate, UnitaryGate)):
        raise TypeError(f"apply expects a gate, got {type(gate).__name__}")
    _validate(gate, state.nbits)

    amps = state.amplitudes
    groups = _groups_for(gate, state.nbits).to(amps.device)
    matrix = gate.matrix.to(dtype=amps.dtype, device=amps.device)

    if groups.shape[0] > 0:
        sub = amps[groups]
        amps[groups] = sub @ matrix.transpose(0, 1)

    if is_debug_enabled():
        assert_normalized(amps)

    logger.debug(
        "apply %s targets=%s controls=%s groups=%d",
        gate.name,
        gate.targets,
        gate.controls,
        groups.shape[0],
    )

    if log is not None:
        log.append_gate(gate)


__all__ = ["apply", "group_indices", "clear_index_cache", "index_cache_info"]
