"""Engine-wide configuration.

Numerical tolerances, the default amplitude dtype, the qubit-count ceiling and
the default measurement seed live in a single frozen :class:`EngineConfig`.
Defaults may be overridden through environment variables read at import time:

- ``QSTATE_ATOL``: tolerance for unitarity, normalization and degenerate
  measurement checks.
- ``QSTATE_MAX_QUBITS``: largest register :func:`qstate.new_state` accepts.
- ``QSTATE_SEED``: seed used by :class:`qstate.Simulation` when neither a
  generator nor a seed is supplied.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator

import torch

_SUPPORTED_DTYPES = (torch.complex64, torch.complex128)


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration shared by state construction, gates and measurement.

    Args:
        atol: Absolute tolerance for unitarity, normalization and
            zero-probability checks. Defaults to 1e-9.
        dtype: Complex dtype of amplitude vectors. Gate matrices are kept
            in complex128 and cast to this dtype when applied. Defaults to ``torch.complex128``; ``complex64`` cannot honour the
            default tolerance.
        max_qubits: Hard ceiling on register size. A state holds
            ``2**nbits`` amplitudes, so memory doubles with every qubit.
        default_seed: Seed for generators created on the caller's behalf.
    """

    atol: float = 1e-9
    dtype: torch.dtype = torch.complex128
    max_qubits: int = 24
    default_seed: int = 0

    def __post_init__(self) -> None:
        if not self.atol > 0.0:
            raise ValueError(f"atol must be positive, got {self.atol}")
        if self.dtype not in _SUPPORTED_DTYPES:
            raise ValueError(
                f"dtype must be one of {_SUPPORTED_DTYPES}, got {self.dtype}"
            )
        if self.max_qubits < 1:
            raise ValueError(f"max_qubits must be >= 1, got {self.max_qubits}")


def _from_environment() -> EngineConfig:
    defaults = EngineConfig()
    return EngineConfig(
        atol=float(os.getenv("QSTATE_ATOL", defaults.atol)),
        dtype=defaults.dtype,
        max_qubits=int(os.getenv("QSTATE_MAX_QUBITS", defaults.max_qubits)),
        default_seed=int(os.getenv("QSTATE_SEED", defaults.default_seed)),
    )


_config: EngineConfig = _from_environment()


def get_config() -> EngineConfig:
    """Return the active engine configuration."""
    return _config


def set_config(**changes: Any) -> EngineConfig:
    """
    Replace fields of the active configuration.

    Parameters
    ----------
    **changes:
        Field names of :class:`EngineConfig` and their new values.

    Returns
    -------
    EngineConfig
        The new active configuration.
    """
    global _config
    _config = replace(_config, **changes)
    return _config


@contextmanager
def config_context(**changes: Any) -> Iterator[EngineConfig]:
    """
    Temporarily override configuration fields inside a ``with`` block.

    Example
    -------
    >>> with config_context(atol=1e-6):
    ...     pass
    """
    global _config
    previous = _config
    _config = replace(_config, **changes)
    try:
        yield _config
    finally:
        _config = previous


__all__ = ["EngineConfig", "get_config", "set_config", "config_context"]
