"""
Deutsch-Jozsa on the state-vector engine.

Register layout: qubit 1 is the answer qubit, flipped to |1> by an X gate so
the prepared input shows up in the circuit log, and qubits
``2 .. n_inputs + 1`` are the query register, with qubit 2 holding the
least-significant input bit. An oracle is a callable that receives
``n_inputs`` and returns the gates implementing ``|x, y> -> |x, y xor f(x)>``.

With one input the circuit is the classic walkthrough: prepare ``|x=0, y=1>``,
apply H to both qubits, query the oracle (CNOT(2, 1) for the balanced
identity function, X(1) for the constant-one function), apply H to the query
qubit and measure it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import torch

from qstate.circuit.session import Simulation
from qstate.gates.core import Gate
from qstate.gates.standard import NOT_MATRIX, cnot, controlled, hadamard, not_gate
from qstate.logging import get_logger

logger = get_logger(__name__)

Oracle = Callable[[int], Sequence[Gate]]
BoolFunction = Callable[[int], bool]

ANSWER_QUBIT = 1


def query_qubits(n_inputs: int) -> Tuple[int, ...]:
    """Qubit labels of the query register, least-significant input bit first."""
    _check_inputs(n_inputs)
    return tuple(range(2, n_inputs + 2))


def _check_inputs(n_inputs: int) -> None:
    if isinstance(n_inputs, bool) or not isinstance(n_inputs, int) or n_inputs < 1:
        raise ValueError(f"n_inputs must be a positive integer, got {n_inputs!r}.")


def constant_oracle(value: int) -> Oracle:
    """Oracle for ``f(x) = value``: nothing for 0, X on the answer qubit for 1."""
    if value not in (0, 1):
        raise ValueError(f"Constant oracle value must be 0 or 1, got {value!r}.")

    def oracle(n_inputs: int) -> List[Gate]:
        _check_inputs(n_inputs)
        return [not_gate(ANSWER_QUBIT)] if value else []

    return oracle


def balanced_oracle(mask: Optional[int] = None) -> Oracle:
    """
    Oracle for ``f(x) = popcount(x & mask) mod 2``.

    Each set bit of ``mask`` adds one CNOT from the matching query qubit to
    the answer qubit. ``mask`` defaults to every input bit; it must be
    non-zero and fit in ``n_inputs`` bits, otherwise the function would not
    be balanced.
    """

    def oracle(n_inputs: int) -> List[Gate]:
        _check_inputs(n_inputs)
        m = (1 << n_inputs) - 1 if mask is None else int(mask)
        if m <= 0 or m >= (1 << n_inputs):
            raise ValueError(f"Balanced oracle mask must be in [1, {1 << n_inputs}), got {m}.")
        return [
            cnot(qubit, ANSWER_QUBIT)
            for bit, qubit in enumerate(query_qubits(n_inputs))
            if (m >> bit) & 1
        ]

    return oracle


def oracle_from_function(f: BoolFunction) -> Oracle:
    """
    Build an oracle from an arbitrary constant or balanced boolean function.

    For every input ``x`` with ``f(x) = 1`` the answer qubit is flipped by a
    NOT controlled on the whole query register, with query qubits whose bit
    of ``x`` is 0 wrapped in X gates.
    """

    def oracle(n_inputs: int) -> List[Gate]:
        _check_inputs(n_inputs)
        size = 1 << n_inputs
        ones = [x for x in range(size) if f(x)]
        if len(ones) not in (0, size // 2, size):
            raise ValueError(
                f"Function is neither constant nor balanced: f(x) = 1 on {len(ones)} of {size} inputs."
            )
        if len(ones) == size:
            return [not_gate(ANSWER_QUBIT)]

        qubits = query_qubits(n_inputs)
        gates: List[Gate] = []
        for x in ones:
            flips = [not_gate(q) for bit, q in enumerate(qubits) if not (x >> bit) & 1]
            gates.extend(flips)
            gates.append(controlled(NOT_MATRIX, qubits, ANSWER_QUBIT))
            gates.extend(flips)
        return gates

    return oracle


@dataclass(frozen=True)
class DeutschJozsaResult:
    """
    Outcome of one Deutsch-Jozsa run.

    ``outcomes[j]`` is the measured value of query qubit ``j + 2``. The
    simulation keeps the collapsed state and the full circuit log for
    rendering or export.
    """

    verdict: str
    outcomes: Tuple[int, ...]
    simulation: Simulation

    @property
    def is_constant(self) -> bool:
        return self.verdict == "constant"


def run_deutsch_jozsa(
    oracle: Oracle,
    n_inputs: int = 1,
    rng: Optional[torch.Generator] = None,
    seed: Optional[int] = None,
) -> DeutschJozsaResult:
    """
    Decide whether ``oracle`` is constant or balanced with a single query.

    Args:
        oracle: Callable returning the oracle gates for ``n_inputs``.
        n_inputs: Number of input bits.
        rng: Generator for the measurements. Outcomes are certain for a
            valid oracle, so the generator is never actually drawn from.
        seed: Seed for a fresh generator when ``rng`` is None.

    Returns:
        A :class:`DeutschJozsaResult` with verdict ``"constant"`` when every
        query qubit measures 0 and ``"balanced"`` otherwise.
    """
    _check_inputs(n_inputs)
    queries = query_qubits(n_inputs)
    sim = Simulation(n_inputs + 1, rng=rng, seed=seed)

    sim.apply(not_gate(ANSWER_QUBIT))
    sim.apply(hadamard(ANSWER_QUBIT), *(hadamard(q) for q in queries))
    sim.apply(*oracle(n_inputs))
    sim.apply(*(hadamard(q) for q in queries))

    outcomes = tuple(sim.measure(q).outcome for q in queries)
    verdict = "constant" if not any(outcomes) else "balanced"
    logger.debug("Deutsch-Jozsa n_inputs=%d outcomes=%s verdict=%s", n_inputs, outcomes, verdict)
    return DeutschJozsaResult(verdict=verdict, outcomes=outcomes, simulation=sim)


__all__ = [
    "ANSWER_QUBIT",
    "BoolFunction",
    "DeutschJozsaResult",
    "Oracle",
    "balanced_oracle",
    "constant_oracle",
    "oracle_from_function",
    "query_qubits",
    "run_deutsch_jozsa",
]
