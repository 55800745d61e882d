"""Simulation session: one state, its circuit log and its random source."""

from __future__ import annotations

from typing import Optional

import torch

from qstate.backend.apply import apply as apply_gate
from qstate.backend.measure import MeasurementResult, measure as measure_qubit
from qstate.config import get_config
from qstate.gates.core import Gate
from qstate.logging import get_logger
from qstate.state.core import BasisSpec, QuantumState, new_state

from .log import CircuitLog

logger = get_logger(__name__)


class Simulation:
    """
    Owns a :class:`QuantumState`, the :class:`CircuitLog` of everything done
    to it, and the ``torch.Generator`` its measurements draw from.

    Example
    -------
    >>> from qstate import Simulation, gates
    >>> sim = Simulation(2, basis={1: 1})
    >>> _ = sim.apply(gates.H(1), gates.H(2), gates.CNOT(2, 1), gates.H(2))
    >>> sim.measure(2).outcome
    1
    """

    def __init__(
        self,
        nbits: int,
        basis: BasisSpec = None,
        rng: Optional[torch.Generator] = None,
        seed: Optional[int] = None,
        dtype: Optional[torch.dtype] = None,
        device: torch.device | str | None = None,
    ) -> None:
        """
        Args:
            nbits: Number of qubits.
            basis: Initial basis state, as accepted by :func:`new_state`.
            rng: Generator used for every measurement. If omitted, a CPU
                generator seeded with ``seed`` is created.
            seed: Seed for the generator created when ``rng`` is None.
                Defaults to the configured ``default_seed``.
            dtype: Complex dtype of the amplitudes.
            device: Torch device of the amplitudes.
        """
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        self._state = new_state(nbits, basis, dtype=dtype, device=device)
        self._log = CircuitLog()
        if rng is None:
            rng = torch.Generator()
            rng.manual_seed(get_config().default_seed if seed is None else int(seed))
        self._rng = rng
        logger.debug("Simulation nbits=%d", nbits)

    @property
    def state(self) -> QuantumState:
        return self._state

    @property
    def log(self) -> CircuitLog:
        return self._log

    @property
    def rng(self) -> torch.Generator:
        return self._rng

    @property
    def nbits(self) -> int:
        return self._state.nbits

    def apply(self, *gates: Gate) -> "Simulation":
        """Apply gates in order, logging each one. Returns ``self``."""
        for gate in gates:
            apply_gate(gate, self._state, log=self._log)
        return self

    def measure(self, qubit: int) -> MeasurementResult:
        """Measure ``qubit`` with the session generator and log the outcome."""
        return measure_qubit(self._state, qubit, self._rng, log=self._log)

    def probabilities(self) -> torch.Tensor:
        return self._state.probabilities()

    def to_text(self, use_ascii: bool = False) -> str:
        """Render the circuit log as a text diagram."""
        from qstate.viz.drawer import to_text

        return to_text(self._log, self.nbits, use_ascii=use_ascii)

    def to_qasm(self, measure: bool = False) -> str:
        """Export the circuit log as OpenQASM 2.0."""
        from qstate.io.qasm2 import export_qasm

        return export_qasm(self._log, self.nbits, measure=measure)

    def __repr__(self) -> str:
        return f"Simulation(nbits={self.nbits}, entries={len(self._log)})"

    def __str__(self) -> str:
        return str(self._state)


__all__ = ["Simulation"]
