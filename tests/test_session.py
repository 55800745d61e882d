"""Tests for the Simulation session object."""

from __future__ import annotations

import pytest
import torch

from qstate import Simulation, gates
from qstate.config import config_context
from qstate.errors import QubitIndexError


def test_walkthrough_balanced() -> None:
    sim = Simulation(2, basis={1: 1})
    sim.apply(gates.H(1), gates.H(2), gates.CNOT(2, 1), gates.H(2))
    result = sim.measure(2)
    assert result.outcome == 1
    assert len(sim.log) == 5
    assert sim.log.has_measurements


def test_apply_returns_self() -> None:
    sim = Simulation(1)
    assert sim.apply(gates.X(1)) is sim
    assert sim.nbits == 1
    assert float(sim.probabilities()[1]) == pytest.approx(1.0)


def test_rng_and_seed_are_exclusive() -> None:
    with pytest.raises(ValueError, match="rng or seed"):
        Simulation(1, rng=torch.Generator(), seed=3)


def test_explicit_rng_is_used() -> None:
    g = torch.Generator()
    g.manual_seed(5)
    sim = Simulation(1, rng=g)
    assert sim.rng is g


def test_seed_reproducibility() -> None:
    def outcomes(seed: int) -> list:
        sim = Simulation(6, seed=seed)
        sim.apply(*(gates.H(q) for q in range(1, 7)))
        return [sim.measure(q).outcome for q in range(1, 7)]

    assert outcomes(11) == outcomes(11)


def test_default_seed_from_config() -> None:
    def outcomes() -> list:
        sim = Simulation(6)
        sim.apply(*(gates.H(q) for q in range(1, 7)))
        return [sim.measure(q).outcome for q in range(1, 7)]

    with config_context(default_seed=42):
        first = outcomes()
        assert outcomes() == first


def test_failed_gate_stops_the_batch() -> None:
    sim = Simulation(2)
    with pytest.raises(QubitIndexError):
        sim.apply(gates.H(1), gates.H(3), gates.H(2))
    assert len(sim.log) == 1
    assert [e.name for e in sim.log] == ["H"]


def test_rendering_and_export_hooks() -> None:
    sim = Simulation(2).apply(gates.H(1), gates.CNOT(1, 2))
    sim.measure(1)
    assert "q1:" in sim.to_text()
    assert "q1:" in sim.to_text(use_ascii=True)
    assert "measure" not in sim.to_qasm()
    assert "measure q[0] -> c[0];" in sim.to_qasm(measure=True)


def test_repr_and_str() -> None:
    sim = Simulation(2, basis=3)
    assert repr(sim) == "Simulation(nbits=2, entries=0)"
    assert str(sim) == "( 1 )\t* |11>"
