"""Pytest configuration and shared fixtures for qstate tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Isolation of the engine configuration and debug flag between tests
"""

import os

import numpy as np
import pytest
import torch

from qstate.config import get_config, set_config
from qstate.diagnostics import is_debug_enabled, set_debug_enabled


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch generator for measurements.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded torch.Generator instance.
    """
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_engine_state():
    """Restore the engine configuration and debug flag after every test."""
    config = get_config()
    debug = is_debug_enabled()
    yield
    set_config(
        atol=config.atol,
        dtype=config.dtype,
        max_qubits=config.max_qubits,
        default_seed=config.default_seed,
    )
    set_debug_enabled(debug)
