"""Amplitude vectors and the qubit/bit indexing convention."""

from .basis import basis_label, bit_of, bits_of, index_of, qubit_mask
from .core import QuantumState, new_state, uniform_state

__all__ = [
    "QuantumState",
    "new_state",
    "uniform_state",
    "index_of",
    "bit_of",
    "bits_of",
    "basis_label",
    "qubit_mask",
]
