"""Projective single-qubit measurement with collapse.

The random source is always passed in explicitly as a ``torch.Generator``;
the engine never touches torch's global generator. Outcomes whose
probability is within tolerance of 0 or 1 are decided without consulting the
generator at all.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import torch

from qstate.config import get_config
from qstate.diagnostics import assert_normalized, is_debug_enabled
from qstate.errors import DegenerateStateError, QubitIndexError
from qstate.logging import get_logger
from qstate.state.core import QuantumState

if TYPE_CHECKING:
    from qstate.circuit.log import CircuitLog

logger = get_logger(__name__)


@dataclass(frozen=True)
class MeasurementResult:
    """
    Outcome of a single-qubit measurement.

    Attributes
    ----------
    qubit:
        Measured qubit (1-based).
    outcome:
        Observed bit, 0 or 1.
    probability:
        Probability the outcome had before collapse.
    """

    qubit: int
    outcome: int
    probability: float

    def __int__(self) -> int:
        return self.outcome


def _check_qubit(state: QuantumState, qubit: int, op: str) -> int:
    if isinstance(qubit, bool):
        raise QubitIndexError(f"{op}: qubit must be an integer, got {qubit!r}")
    try:
        qubit = operator.index(qubit)
    except TypeError:
        raise QubitIndexError(f"{op}: qubit must be an integer, got {qubit!r}") from None
    if qubit < 1 or qubit > state.nbits:
        raise QubitIndexError(f"{op}: qubit {qubit} out of range [1, {state.nbits}]")
    return qubit


def _check_rng(rng: object) -> torch.Generator:
    if not isinstance(rng, torch.Generator):
        raise TypeError(
            f"measurement requires an explicit torch.Generator, got {type(rng).__name__}"
        )
    return rng


def _bit_mask(state: QuantumState, qubit: int) -> torch.Tensor:
    idx = torch.arange(state.dim, device=state.amplitudes.device)
    return ((idx >> (qubit - 1)) & 1) == 1


def marginal_probabilities(state: QuantumState, qubit: int) -> Tuple[float, float]:
    """
    Return ``(p0, p1)`` for measuring ``qubit``, without collapsing.

    ``p1`` is derived as ``1 - p0`` so the pair sums to exactly 1.
    """
    qubit = _check_qubit(state, qubit, "marginal_probabilities")
    probs = state.probabilities()
    p0 = float(probs[~_bit_mask(state, qubit)].sum())
    p0 = min(max(p0, 0.0), 1.0)
    return p0, 1.0 - p0


def _certain_outcome(p0: float, p1: float, atol: float) -> Optional[int]:
    """Return the deterministic outcome, or None if a draw is needed."""
    if p1 <= atol:
        return 0
    if p0 <= atol:
        return 1
    return None


def _uniform(rng: torch.Generator, size: int = 1) -> torch.Tensor:
    return torch.rand(size, generator=rng, dtype=torch.float64, device=rng.device)


def measure(
    state: QuantumState,
    qubit: int,
    rng: torch.Generator,
    log: Optional["CircuitLog"] = None,
) -> MeasurementResult:
    """
    Measure ``qubit`` in the computational basis and collapse ``state``.

    Args:
        state: State to measure; collapsed in place.
        qubit: Qubit label in ``[1, state.nbits]``.
        rng: Explicit random source. Not consulted when the outcome is
            certain within tolerance.
        log: Optional circuit log; a measurement entry is appended on
            success.

    Returns:
        The observed outcome and its pre-collapse probability.

    Raises:
        QubitIndexError: If ``qubit`` is out of range.
        TypeError: If ``rng`` is not a ``torch.Generator``.
        DegenerateStateError: If the drawn outcome has numerically zero
            probability mass.

    On any error the state is left unmodified.
    """
    qubit = _check_qubit(state, qubit, "measure")
    _check_rng(rng)
    atol = get_config().atol

    amps = state.amplitudes
    ones = _bit_mask(state, qubit)
    probs = amps.abs() ** 2
    p0 = min(max(float(probs[~ones].sum()), 0.0), 1.0)
    p1 = 1.0 - p0

    outcome = _certain_outcome(p0, p1, atol)
    if outcome is None:
        outcome = int(float(_uniform(rng)[0]) < p1)

    p_outcome = p1 if outcome else p0
    keep = ones if outcome else ~ones
    surviving = float(probs[keep].sum())
    if p_outcome <= atol or surviving <= atol:
        raise DegenerateStateError(
            f"measure qubit {qubit}: outcome {outcome} has probability {surviving!r}"
        )

    amps.masked_fill_(~keep, 0)
    amps.mul_(1.0 / math.sqrt(surviving))

    if is_debug_enabled():
        assert_normalized(amps)

    logger.debug("measure qubit=%d outcome=%d p=%.6g", qubit, outcome, p_outcome)

    if log is not None:
        log.append_measurement(qubit, outcome)
    return MeasurementResult(qubit=qubit, outcome=outcome, probability=p_outcome)


def sample_counts(
    state: QuantumState,
    qubit: int,
    shots: int,
    rng: torch.Generator,
) -> Dict[int, int]:
    """
    Tally ``shots`` independent single-qubit outcomes for ``qubit``.

    The marginal probability of 1 is computed once and ``shots`` uniform
    draws are compared against it. ``state`` is neither copied nor
    collapsed. Certain outcomes do not
    consult ``rng``.

    Returns
    -------
    dict
        ``{0: count, 1: count}``.
    """
    if shots <= 0:
        raise ValueError(f"shots must be a positive integer, got {shots}")
    _check_rng(rng)
    p0, p1 = marginal_probabilities(state, qubit)

    outcome = _certain_outcome(p0, p1, get_config().atol)
    if outcome is not None:
        return {0: shots, 1: 0} if outcome == 0 else {0: 0, 1: shots}

    ones = int((_uniform(rng, shots) < p1).sum())
    return {0: shots - ones, 1: ones}


__all__ = ["MeasurementResult", "measure", "marginal_probabilities", "sample_counts"]
