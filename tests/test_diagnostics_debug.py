"""Tests for diagnostics helpers and debug mode."""

from __future__ import annotations

import pytest
import torch

from qstate.backend import apply, measure
from qstate.diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    is_normalized,
    set_debug_enabled,
    state_norm,
)
from qstate.gates import H, X
from qstate.state import new_state, uniform_state
from qstate.state.core import QuantumState


def _unnormalized() -> QuantumState:
    return QuantumState(1, torch.tensor([1.0, 1.0], dtype=torch.complex128), check_norm=False)


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    set_debug_enabled(False)
    assert not is_debug_enabled()

    with debug_context(True):
        assert is_debug_enabled()
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()

    assert not is_debug_enabled()


def test_debug_mode_checks_gate_application() -> None:
    with debug_context(False):
        apply(X(1), _unnormalized())

    with debug_context(True):
        apply(H(1), new_state(1))
        with pytest.raises(ValueError, match="not normalized"):
            apply(X(1), _unnormalized())


def test_debug_mode_checks_measurement(torch_rng: torch.Generator) -> None:
    with debug_context(True):
        assert measure(uniform_state(2), 2, torch_rng).outcome in (0, 1)


def test_state_norm() -> None:
    assert state_norm(uniform_state(3).amplitudes) == pytest.approx(1.0)
    assert state_norm(_unnormalized().amplitudes) == pytest.approx(2**0.5)
    with pytest.raises(ValueError, match="1-D"):
        state_norm(torch.zeros(2, 2, dtype=torch.complex128))


def test_is_normalized() -> None:
    assert is_normalized(new_state(2).amplitudes)
    assert not is_normalized(_unnormalized().amplitudes)
    assert is_normalized(_unnormalized().amplitudes, atol=1.5)


def test_assert_normalized() -> None:
    assert_normalized(uniform_state(2).amplitudes)
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(_unnormalized().amplitudes)
    with pytest.raises(ValueError, match="non-finite"):
        assert_normalized(torch.tensor([float("nan"), 0.0], dtype=torch.complex128))


def test_fidelity() -> None:
    zero = new_state(1).amplitudes
    one = new_state(1, 1).amplitudes
    plus = uniform_state(1).amplitudes
    assert fidelity(zero, zero) == pytest.approx(1.0)
    assert fidelity(zero, one) == pytest.approx(0.0)
    assert fidelity(zero, plus) == pytest.approx(0.5)
    with pytest.raises(ValueError, match="Shape"):
        fidelity(zero, new_state(2).amplitudes)
