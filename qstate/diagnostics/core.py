"""Numerical checks on amplitude vectors."""

from __future__ import annotations

from typing import Optional

import torch

from qstate.config import get_config


def state_norm(amplitudes: torch.Tensor) -> float:
    """
    Return the L2 norm of a 1-D amplitude vector.

    Raises
    ------
    ValueError
        If ``amplitudes`` is not one-dimensional.
    """
    if amplitudes.dim() != 1:
        raise ValueError(
            f"state_norm expects a 1-D tensor, got shape {tuple(amplitudes.shape)}."
        )
    norm_sq = (amplitudes.conj() * amplitudes).sum().real
    return float(torch.sqrt(norm_sq))


def is_normalized(amplitudes: torch.Tensor, atol: Optional[float] = None) -> bool:
    """Return True if ``sum(|a|^2)`` is 1 within ``atol``."""
    if atol is None:
        atol = get_config().atol
    total = float((amplitudes.abs() ** 2).sum())
    return abs(total - 1.0) <= atol


def assert_normalized(amplitudes: torch.Tensor, atol: Optional[float] = None) -> None:
    """
    Assert that an amplitude vector has total probability 1.

    Parameters
    ----------
    amplitudes:
        Complex 1-D tensor.
    atol:
        Absolute tolerance on ``|sum(|a|^2) - 1|``. Defaults to the
        configured tolerance.

    Raises
    ------
    ValueError
        If the vector holds non-finite values or is not normalized.
    """
    if atol is None:
        atol = get_config().atol
    if not bool(torch.all(torch.isfinite(amplitudes.abs()))):
        raise ValueError("State contains non-finite amplitudes.")
    total = float((amplitudes.abs() ** 2).sum())
    if abs(total - 1.0) > atol:
        raise ValueError(
            f"State is not normalized within tolerance {atol}: "
            f"total probability {total!r}."
        )


def fidelity(a: torch.Tensor, b: torch.Tensor) -> float:
    """Return ``|<a|b>|^2`` for two normalized amplitude vectors."""
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {tuple(a.shape)} vs {tuple(b.shape)}.")
    return float((a.conj() * b).sum().abs() ** 2)
